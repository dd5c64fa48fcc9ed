"""Unit tests for individual components in isolation.

Coverage:
    - client/: SSE decoding, conversation state, fallbacks, transport logic
    - parsing/: Resume PDF validation and text extraction
    - agent/: Coach configuration, prompts, topic gate and formatting

HTTP traffic is served by httpx.MockTransport; the agno model is patched.
"""
