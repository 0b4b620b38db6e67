from typing import Any, Optional


class RelayError(Exception):
    """Raised when the chat relay rejects a request or cannot be reached."""

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


class ConversationError(Exception):
    """The error recorded by a ConversationManager for its last failed operation."""

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details
