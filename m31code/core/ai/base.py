"""
Base Model Handle Interface

Abstract base class for all model backends.
Implements strategy pattern for backend abstraction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProviderType(Enum):
    """Supported backend kinds."""
    ECHO = "echo"
    OPENAI = "openai"
    OLLAMA = "ollama"


@dataclass(frozen=True)
class ModelDescriptor:
    """Identifies a backend. Immutable once constructed."""
    name: str
    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @property
    def model_id(self) -> str:
        """Backend-side model identifier (falls back to the descriptor name)."""
        return self.model or self.name


class ModelHandle(ABC):
    """
    Abstract base class for all model handles.

    A handle is a constructed, invocable backend bound to one
    descriptor. Handles are owned by the model registry; callers
    re-resolve the active handle on every request.
    """

    provider_type: ProviderType

    def __init__(self, descriptor: ModelDescriptor):
        """
        Initialize the handle.

        Args:
            descriptor: Descriptor this handle is bound to
        """
        self.descriptor = descriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    @abstractmethod
    async def generate_suggestion(self, text: str) -> str:
        """
        Produce a code suggestion for the given snippet.

        Args:
            text: Sanitized code selected by the user

        Returns:
            Suggested code or explanation
        """
        pass

    @abstractmethod
    async def generate_response(self, text: str) -> str:
        """
        Produce a chat reply for the given message.

        Args:
            text: Sanitized user message

        Returns:
            Assistant reply
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
