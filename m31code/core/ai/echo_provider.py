"""
Echo Model Implementation

Offline handle that answers with a fixed template. Used when a
descriptor carries neither an API key nor an endpoint.
"""

from m31code.core.ai.base import ModelHandle, ProviderType


class EchoModel(ModelHandle):
    """Deterministic local backend."""

    provider_type = ProviderType.ECHO

    async def generate_suggestion(self, text: str) -> str:
        return f"Suggestion for: {text}"

    async def generate_response(self, text: str) -> str:
        return f"Response to: {text}"
