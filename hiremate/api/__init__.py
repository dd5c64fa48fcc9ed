"""FastAPI endpoints for the HireMate backend.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - GET /api/chat/stream: Coach answer as server-sent events
    - POST /api/chat/ask: Coach answer in one response
    - GET /api/credits: Credit balance of the bearer token
    - /api/resume/*: Deprecated, always 410 Gone
    - /api/resume-analyzer/*: Resume upload and questions
"""

from hiremate.api.app import app, create_app

__all__ = ["app", "create_app"]
