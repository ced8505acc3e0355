# apps/activity/serializers.py

from rest_framework import serializers

from .models import LogEntry


class LogEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = LogEntry
        fields = ['id', 'user', 'action', 'timestamp']
        read_only_fields = fields
