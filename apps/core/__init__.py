# apps/core/__init__.py

"""
Core - base application of the task board

Contains:
- User model (credential store)
- Authentication service and bearer-token DRF authentication
- Error taxonomy and the API exception handler
- Health check
"""
