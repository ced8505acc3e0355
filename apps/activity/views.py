# apps/activity/views.py

from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import LogEntry
from .serializers import LogEntrySerializer


class LogListView(APIView):
    """
    GET /api/logs -> newest-first activity entries

    Bounded by TASKBOARD_LOG_LIMIT.
    """

    def get(self, request):
        entries = LogEntry.objects.recent(settings.TASKBOARD_LOG_LIMIT)
        return Response(LogEntrySerializer(entries, many=True).data)
