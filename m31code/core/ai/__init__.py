"""
Model Backend Abstraction Layer

Provides a unified interface for all model backends (OpenAI, Ollama, echo).
Uses strategy pattern for backend switching.
"""

from m31code.core.ai.base import ModelDescriptor, ModelHandle, ProviderType
from m31code.core.ai.echo_provider import EchoModel
from m31code.core.ai.ollama_provider import OllamaModel
from m31code.core.ai.openai_provider import OpenAIModel
from m31code.core.ai.factory import ModelFactory

__all__ = [
    "ModelDescriptor",
    "ModelHandle",
    "ProviderType",
    "EchoModel",
    "OllamaModel",
    "OpenAIModel",
    "ModelFactory",
]
