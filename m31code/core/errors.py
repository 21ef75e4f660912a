"""
Error taxonomy for the assistant core.

Registry errors propagate unchanged to callers. Invocation errors are
opaque: their message never carries backend detail, the original
exception is only reachable through ``__cause__``.
"""

from typing import Optional


class M31CodeError(Exception):
    """Base class for all m31code errors."""

    pass


class ProviderNotConfiguredError(M31CodeError):
    """
    Raised when a model descriptor cannot be turned into a handle
    (unknown provider, missing API key for a keyed backend).
    """

    pass


class ModelUnavailableError(M31CodeError):
    """The active model name has no constructed handle."""

    def __init__(self, name: Optional[str] = None):
        self.name = name
        super().__init__("No model available")


class UnknownModelError(M31CodeError):
    """A switch was requested to a model that has no constructed handle."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("Model not found")


class ModelInvocationError(M31CodeError):
    """Opaque wrapper over any failure raised while a model was invoked."""

    pipeline = "model"
    message = "Failed to invoke model"

    def __init__(self):
        super().__init__(self.message)


class SuggestionFailedError(ModelInvocationError):
    pipeline = "suggestion"
    message = "Failed to generate suggestion"


class ResponseFailedError(ModelInvocationError):
    pipeline = "chat"
    message = "Failed to generate response"
