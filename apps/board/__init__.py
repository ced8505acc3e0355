# apps/board/__init__.py

"""
Board - realtime task board

Features:
- Task CRUD grouped by status (Todo / In Progress / Done)
- Optimistic concurrency check on updates
- Smart assign to the least busy user
- WebSocket broadcast of the whole board after every change
"""
