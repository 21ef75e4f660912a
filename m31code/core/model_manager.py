"""
Model registry and active-model selection.

The registry is the single source of truth for which model answers a
request. It owns one RegistryState; nothing here is module-global.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from m31code.core.ai.base import ModelDescriptor, ModelHandle
from m31code.core.ai.factory import ModelFactory
from m31code.core.errors import ModelUnavailableError, UnknownModelError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt4"
DEFAULT_AVAILABLE_MODELS: Tuple[str, ...] = ("gpt4", "codellama", "mistral")

HandleBuilder = Callable[[ModelDescriptor], Union[ModelHandle, Awaitable[ModelHandle]]]


@dataclass
class RegistryState:
    """
    Declared models, the active selection and the constructed handles.

    ``handles`` only holds names passed through ``ModelRegistry.initialize``.
    """
    known_names: Tuple[str, ...]
    active_name: str
    handles: Dict[str, ModelHandle] = field(default_factory=dict)


class ModelRegistry:
    """
    Owns and mutates a RegistryState.

    Supports:
    - Explicit (lazy) handle construction from descriptors
    - Resolving the active handle per request
    - Switching the active model among constructed handles
    """

    def __init__(
        self,
        known_names: Sequence[str] = DEFAULT_AVAILABLE_MODELS,
        default_model: str = DEFAULT_MODEL,
        builder: Optional[HandleBuilder] = None,
    ):
        """
        Initialize the registry.

        Args:
            known_names: Declared model names, in listing order
            default_model: Initially active name, must be declared
            builder: Descriptor -> handle function (sync or async);
                defaults to ModelFactory.build
        """
        names = tuple(dict.fromkeys(known_names))
        if default_model not in names:
            raise ValueError(
                f"Default model '{default_model}' is not among the available models {list(names)}"
            )
        self._state = RegistryState(known_names=names, active_name=default_model)
        self._builder: HandleBuilder = builder or ModelFactory.build

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def active_name(self) -> str:
        return self._state.active_name

    def is_initialized(self, name: str) -> bool:
        """True if a handle has been constructed for ``name``."""
        return name in self._state.handles

    async def initialize(self, descriptors: Iterable[ModelDescriptor]) -> None:
        """
        Construct a handle for every descriptor.

        Duplicate names overwrite the earlier handle (last write wins).

        Args:
            descriptors: Descriptors to build
        """
        for descriptor in descriptors:
            handle = self._builder(descriptor)
            if inspect.isawaitable(handle):
                handle = await handle
            if descriptor.name in self._state.handles:
                logger.warning(f"Model {descriptor.name} already initialized, overwriting")
            self._state.handles[descriptor.name] = handle
            logger.info(f"Initialized model: {descriptor.name} ({type(handle).__name__})")

    async def get_current_model(self) -> ModelHandle:
        """
        Resolve the handle for the active model.

        Raises:
            ModelUnavailableError: If the active name has no handle
        """
        name = self._state.active_name
        handle = self._state.handles.get(name)
        if handle is None:
            raise ModelUnavailableError(name)
        return handle

    def list_available(self) -> List[str]:
        """
        Declared model names in their original order.

        This is a declared-availability list, not a readiness list: names
        without a constructed handle are included.
        """
        return list(self._state.known_names)

    def switch_active(self, name: str) -> None:
        """
        Make ``name`` the active model.

        Only constructed handles are valid targets; the state is left
        untouched on failure.

        Raises:
            UnknownModelError: If ``name`` has no handle
        """
        if name not in self._state.handles:
            logger.warning(f"Rejected switch to uninitialized model: {name}")
            raise UnknownModelError(name)
        self._state.active_name = name
        logger.info(f"Switched active model to: {name}")
