# apps/__init__.py

"""
Task Board - Django applications

This package holds every application of the system:
- core: users, authentication, error handling, health
- board: tasks, smart-assign and the realtime WebSocket channel
- activity: append-only activity log
"""

__version__ = '0.1.0'
