# apps/activity/models.py

from django.db import models
from django.utils import timezone


class LogEntryQuerySet(models.QuerySet):

    def recent(self, limit):
        """Newest entries first, at most `limit` of them"""
        return self.order_by('-timestamp', '-id')[:limit]


class LogEntry(models.Model):
    """
    One line of the activity log

    `user` is the acting user's email copied at write time, not a
    foreign key, so entries survive whatever happens to the account.
    """

    user = models.CharField(max_length=254)
    action = models.TextField()
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    objects = LogEntryQuerySet.as_manager()

    class Meta:
        db_table = 'log_entry'
        ordering = ['-timestamp', '-id']

    def __str__(self):
        return f"{self.user}: {self.action}"

    @classmethod
    def record(cls, user_email, action):
        """Appends an entry; the only write path of the log"""
        return cls.objects.create(user=user_email, action=action)

