"""HireMate - AI interview coach with a streaming chat client.

Combines FastAPI for HTTP streaming, Agno for coach orchestration,
httpx for the chat client, NiceGUI for the chat page, and Pydantic for
data validation.

Components:
    - client: Streaming chat client with fallback and conversation state
    - api: HTTP endpoints, SSE chat stream and resume analyzer service
    - agent: LLM coach with topic gating and answer formatting
    - parsing: PDF resume text extraction
    - ui: Web chat page built on the client
    - models: Request/response and wire event schemas
"""

__version__ = "0.1.0"
