"""Test package for FinChat.

Structure:
    - unit/: Encoder, store, prompt assembly, gateway and reducer tests
    - integration/: Upload and chat endpoints through the ASGI app

The Gemini SDK is never called for real; the gateway is mocked or replaced.
Leverages pytest with pytest-check for soft assertions.
"""
