"""
Model Factory

Factory pattern for creating model handles from descriptors.
Supports dynamic backend registration.
"""

import logging
from typing import Dict, List, Type

from m31code.core.ai.base import ModelDescriptor, ModelHandle, ProviderType
from m31code.core.ai.echo_provider import EchoModel
from m31code.core.ai.ollama_provider import OllamaModel
from m31code.core.ai.openai_provider import OpenAIModel
from m31code.core.errors import ProviderNotConfiguredError

logger = logging.getLogger(__name__)


class ModelFactory:
    """
    Factory for creating model handles.

    Supports:
    - Dynamic backend registration
    - Provider inference from descriptor fields
    """

    _providers: Dict[ProviderType, Type[ModelHandle]] = {
        ProviderType.ECHO: EchoModel,
        ProviderType.OPENAI: OpenAIModel,
        ProviderType.OLLAMA: OllamaModel,
    }

    @classmethod
    def register_provider(
        cls,
        provider_type: ProviderType,
        handle_class: Type[ModelHandle]
    ) -> None:
        """
        Register a handle class for a provider type.

        Args:
            provider_type: Provider type enum
            handle_class: Class implementing ModelHandle
        """
        cls._providers[provider_type] = handle_class
        logger.info(f"Registered provider: {provider_type.value}")

    @staticmethod
    def resolve_provider(descriptor: ModelDescriptor) -> ProviderType:
        """
        Determine which backend serves a descriptor.

        An explicit ``provider`` wins. Otherwise an API key selects OpenAI,
        a bare endpoint selects Ollama, and neither selects the echo backend.

        Raises:
            ProviderNotConfiguredError: If the explicit provider is unknown
        """
        if descriptor.provider:
            if not isinstance(descriptor.provider, str):
                raise ProviderNotConfiguredError(
                    f"Provider for model '{descriptor.name}' must be a string, "
                    f"got {descriptor.provider!r}"
                )
            try:
                return ProviderType(descriptor.provider.strip().lower())
            except ValueError:
                raise ProviderNotConfiguredError(
                    f"Unknown provider '{descriptor.provider}' for model '{descriptor.name}'"
                ) from None
        if descriptor.api_key:
            return ProviderType.OPENAI
        if descriptor.endpoint:
            return ProviderType.OLLAMA
        return ProviderType.ECHO

    @classmethod
    def build(cls, descriptor: ModelDescriptor) -> ModelHandle:
        """
        Create a handle for a descriptor.

        Args:
            descriptor: Model descriptor

        Returns:
            Handle instance

        Raises:
            ProviderNotConfiguredError: If the provider is unknown, not
                registered, or missing required settings
        """
        provider_type = cls.resolve_provider(descriptor)
        handle_class = cls._providers.get(provider_type)
        if not handle_class:
            raise ProviderNotConfiguredError(
                f"Provider type {provider_type.value} not registered"
            )
        return handle_class(descriptor)

    @classmethod
    def get_available_providers(cls) -> List[str]:
        """
        Get list of registered provider types.

        Returns:
            List of provider type names
        """
        return [pt.value for pt in cls._providers.keys()]
