"""
Application errors for the model client and orchestration.

ModelError subclasses are raised by the model client when it cannot produce text.
The orchestrator catches them and turns them into a single user-facing answer,
so none of these cross the orchestration boundary.
"""


class ModelError(Exception):
    """Base class: the text-generation model could not produce a response."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ModelUnavailableError(ModelError):
    """Raised when no model provider is configured or its SDK is missing."""


class ModelTimeoutError(ModelError):
    """Raised when a model call exceeds its timeout."""


class ModelTransportError(ModelError):
    """Raised on network faults, non-200 responses or empty model output."""


class OrchestrationCancelledError(Exception):
    """Raised when the caller's cancellation signal fires during a model call."""

    def __init__(self, message: str = "Request cancelled.") -> None:
        self.message = message
        super().__init__(message)
