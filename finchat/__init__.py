"""FinChat - conversational financial assistant backed by Google Gemini.

Combines FastAPI for the HTTP boundary, google-genai for model access,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: Upload and chat endpoints
    - agent: Configuration, prompt assembly and the Gemini gateway
    - conversation: Session message log and response reduction
    - documents: Upload encoding for inline model attachments
    - ui: Web interface for chat interactions
    - models: Message, document and request schemas
"""

__version__ = "0.1.0"
