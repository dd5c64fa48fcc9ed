"""Integration tests for components working together as a system.

Coverage:
    - Chat stream and ask endpoints over real ASGI requests
    - Credit metering and the legacy resume endpoints
    - Resume analyzer upload and questions with generated PDFs
    - ChatClient talking to the FastAPI app through ASGITransport
"""
