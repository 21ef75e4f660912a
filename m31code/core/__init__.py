# Core modules
from .errors import (
    M31CodeError,
    ModelInvocationError,
    ModelUnavailableError,
    ProviderNotConfiguredError,
    ResponseFailedError,
    SuggestionFailedError,
    UnknownModelError,
)
from .model_manager import ModelRegistry, RegistryState
from .security import AngleBracketSanitizer, BaseSanitizer
from .ai_service import AIService
from .chat_session import ChatSession, Message

__all__ = [
    "M31CodeError",
    "ModelInvocationError",
    "ModelUnavailableError",
    "ProviderNotConfiguredError",
    "ResponseFailedError",
    "SuggestionFailedError",
    "UnknownModelError",
    "ModelRegistry",
    "RegistryState",
    "AngleBracketSanitizer",
    "BaseSanitizer",
    "AIService",
    "ChatSession",
    "Message",
]
