"""Test package for HireMate.

Structure:
    - unit/: Client, parsing, formatting and agent tests in isolation
    - integration/: API endpoints and the client driven against the app

The language model is always replaced by a scripted fake coach, so no API
key is needed. Uses pytest with pytest-check for soft assertions.
"""
