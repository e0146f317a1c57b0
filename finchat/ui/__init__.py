"""NiceGUI interface - thin presentation layer for the financial assistant.

Responsibilities:
    - Chat message display with markdown replies
    - Document tray uploading each file through the API
    - Per-page conversation log and send-button locking

Owns one ConversationStore per page. Delegates encoding and model calls to
the API.
"""
