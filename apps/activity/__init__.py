# apps/activity/__init__.py

"""
Activity - append-only log of every task mutation

Entries are written by the task service and read newest-first by
GET /api/logs. Nothing updates or deletes them.
"""
