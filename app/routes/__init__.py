"""
Routes package for the Task Manager application.

This package contains route blueprints:
- api: REST API endpoints for tasks and the health check
- users: endpoints returning the authenticated user
"""
