"""
Ollama Model Implementation

Calls a local or remote Ollama instance via HTTP /api/generate.
"""

import asyncio
import logging
from typing import Any, Dict

import requests

from m31code.core.ai.base import ModelDescriptor, ModelHandle, ProviderType

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_URL = "http://127.0.0.1:11434"


class OllamaModel(ModelHandle):
    """Ollama HTTP backend."""

    provider_type = ProviderType.OLLAMA

    def __init__(self, descriptor: ModelDescriptor, timeout: int = 60):
        super().__init__(descriptor)
        self.base_url = (descriptor.endpoint or DEFAULT_OLLAMA_URL).rstrip("/")
        self.timeout = timeout
        logger.info(
            f"OllamaModel initialized with model: {descriptor.model_id} at {self.base_url}"
        )

    def _generate(self, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "model": self.descriptor.model_id,
            "prompt": prompt,
            "stream": False,
        }
        resp = requests.post(
            self.base_url + "/api/generate", json=payload, timeout=self.timeout
        )
        resp.raise_for_status()
        text = resp.json().get("response") or ""
        return text if isinstance(text, str) else str(text)

    async def generate_suggestion(self, text: str) -> str:
        prompt = (
            "Improve the following code. Reply with the code only.\n\n" + text
        )
        return await asyncio.to_thread(self._generate, prompt)

    async def generate_response(self, text: str) -> str:
        return await asyncio.to_thread(self._generate, text)
