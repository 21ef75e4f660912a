"""
OpenAI Model Implementation

Concrete implementation of ModelHandle for the OpenAI API
(or any OpenAI-compatible endpoint).
"""

import logging
from typing import Dict, List

from openai import AsyncOpenAI

from m31code.core.ai.base import ModelDescriptor, ModelHandle, ProviderType
from m31code.core.errors import ProviderNotConfiguredError

logger = logging.getLogger(__name__)

SUGGESTION_SYSTEM_PROMPT = (
    "You are a coding assistant embedded in an editor. "
    "Given a code selection, reply with an improved version of the code only, "
    "without surrounding commentary."
)

CHAT_SYSTEM_PROMPT = (
    "You are a helpful programming assistant. Answer concisely."
)


class OpenAIModel(ModelHandle):
    """OpenAI chat-completions backend."""

    provider_type = ProviderType.OPENAI

    def __init__(
        self,
        descriptor: ModelDescriptor,
        temperature: float = 0.2,
        max_tokens: int = 2048,
    ):
        """Initialize OpenAI handle."""
        super().__init__(descriptor)
        if not descriptor.api_key:
            raise ProviderNotConfiguredError(
                f"OpenAI API key is required for model '{descriptor.name}'"
            )
        # endpoint doubles as base_url for OpenAI-compatible servers
        self.client = AsyncOpenAI(
            api_key=descriptor.api_key,
            base_url=descriptor.endpoint or None,
        )
        self.temperature = temperature
        self.max_tokens = max_tokens
        logger.info(f"OpenAIModel initialized with model: {descriptor.model_id}")

    async def _ask(self, system_prompt: str, user_prompt: str) -> str:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        response = await self.client.chat.completions.create(
            model=self.descriptor.model_id,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            stream=False,
        )
        return response.choices[0].message.content or ""

    async def generate_suggestion(self, text: str) -> str:
        return await self._ask(SUGGESTION_SYSTEM_PROMPT, text)

    async def generate_response(self, text: str) -> str:
        return await self._ask(CHAT_SYSTEM_PROMPT, text)
