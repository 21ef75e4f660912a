"""
Request mediation between callers and the active model.

Every call runs the same pipeline: sanitize input, resolve the active
handle, invoke it, sanitize the output.
"""

import logging
from typing import Awaitable, Callable, Optional, Type

from m31code.core.ai.base import ModelHandle
from m31code.core.errors import (
    ModelInvocationError,
    ResponseFailedError,
    SuggestionFailedError,
)
from m31code.core.model_manager import ModelRegistry
from m31code.core.security import AngleBracketSanitizer, BaseSanitizer

logger = logging.getLogger(__name__)


class AIService:
    """
    Sanitization envelope around model calls.

    Registry errors (ModelUnavailableError) propagate unchanged. Anything
    raised while the model runs is re-raised as the pipeline's opaque
    error kind, with the original exception chained as ``__cause__``.
    """

    def __init__(self, registry: ModelRegistry, sanitizer: Optional[BaseSanitizer] = None):
        self.registry = registry
        self.sanitizer = sanitizer or AngleBracketSanitizer()

    async def _run(
        self,
        text: str,
        invoke: Callable[[ModelHandle, str], Awaitable[str]],
        failure: Type[ModelInvocationError],
    ) -> str:
        sanitized = self.sanitizer.sanitize_input(text)
        model = await self.registry.get_current_model()

        try:
            result = await invoke(model, sanitized)
            return self.sanitizer.validate_output(result)
        except Exception as e:
            logger.error(
                f"{failure.pipeline} pipeline failed on model {model.name}: {e}",
                exc_info=True,
            )
            raise failure() from e

    async def get_suggestion(self, code: str) -> str:
        """
        Ask the active model for a suggestion on a code selection.

        Raises:
            ModelUnavailableError: If no handle backs the active model
            SuggestionFailedError: If the model invocation fails
        """
        return await self._run(
            code,
            lambda model, text: model.generate_suggestion(text),
            SuggestionFailedError,
        )

    async def chat(self, message: str) -> str:
        """
        Send a chat message to the active model.

        Raises:
            ModelUnavailableError: If no handle backs the active model
            ResponseFailedError: If the model invocation fails
        """
        return await self._run(
            message,
            lambda model, text: model.generate_response(text),
            ResponseFailedError,
        )
