# m31code/core/security.py
"""
Sanitization policies applied around every model invocation.

The default policy only strips angle brackets. It is a markup-injection
mitigation, not a security boundary.
"""

import re
from abc import ABC, abstractmethod


class BaseSanitizer(ABC):
    """Two-method contract every sanitization policy implements."""

    @abstractmethod
    def sanitize_input(self, text: str) -> str:
        """Transform text before it reaches a model."""
        pass

    @abstractmethod
    def validate_output(self, text: str) -> str:
        """Transform text returned by a model."""
        pass


class AngleBracketSanitizer(BaseSanitizer):
    """Removes every ``<`` and ``>`` from input and output alike."""

    _pattern = re.compile(r"[<>]")

    def _strip(self, text: str) -> str:
        return self._pattern.sub("", text)

    def sanitize_input(self, text: str) -> str:
        return self._strip(text)

    def validate_output(self, text: str) -> str:
        return self._strip(text)
