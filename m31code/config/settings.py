"""
Configuration Settings

Turns the JSON configuration into model descriptors and a registry.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from m31code.core.ai.base import ModelDescriptor
from m31code.core.model_manager import (
    DEFAULT_AVAILABLE_MODELS,
    DEFAULT_MODEL,
    ModelRegistry,
)
from m31code.services.config_service import ConfigService

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    """Built-in configuration: every declared model backed by the echo backend."""
    return {
        "default_model": DEFAULT_MODEL,
        "available_models": list(DEFAULT_AVAILABLE_MODELS),
        "models": [{"name": name} for name in DEFAULT_AVAILABLE_MODELS],
    }


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the config file, or the built-in defaults when it is missing.

    Raises:
        ValueError: If the file exists but is not valid JSON
    """
    service = ConfigService(config_path=config_path)
    if not service.exists():
        logger.info(f"No config at {service.config_path}, using defaults")
        return default_config()
    return service.load()


def load_descriptors(config: Dict[str, Any]) -> List[ModelDescriptor]:
    """
    Build descriptors from the ``models`` list of a config.

    Entries without a ``name`` are skipped.
    """
    descriptors: List[ModelDescriptor] = []
    for entry in config.get("models") or []:
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning(f"Skipping model entry without a name: {entry!r}")
            continue
        descriptors.append(
            ModelDescriptor(
                name=str(entry["name"]),
                api_key=entry.get("api_key"),
                endpoint=entry.get("endpoint"),
                provider=entry.get("provider"),
                model=entry.get("model"),
            )
        )
    return descriptors


def build_registry(config: Dict[str, Any]) -> ModelRegistry:
    """Create an (uninitialized) registry from ``available_models`` / ``default_model``."""
    known = config.get("available_models") or list(DEFAULT_AVAILABLE_MODELS)
    default = config.get("default_model") or DEFAULT_MODEL
    return ModelRegistry(known_names=known, default_model=default)
