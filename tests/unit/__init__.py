"""Unit tests for individual components in isolation.

Coverage:
    - documents/: Size limits, content type resolution, base64 encoding
    - conversation/: Seeded log, append-only behaviour, reduction of outcomes
    - agent/: Configuration, prompt assembly and Gemini gateway

Uses unittest.mock for the google-genai client.
"""
