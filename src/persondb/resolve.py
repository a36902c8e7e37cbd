"""Resolver: expand ${...} references in parsed configuration values."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

_INTERP_PATTERN = re.compile(r"\$\$\{|(\$\{([^{}]+)\})")
_FULL_PATTERN = re.compile(r"\$\{([^{}]+)\}")


def default_context() -> dict[str, Any]:
    """Names every configuration can reference: ``env.*`` and ``cwd``."""
    return {"env": dict(os.environ), "cwd": os.getcwd}


class Resolver:
    """Resolve ${...} references against a context mapping.

    ``${env.HOME}`` walks into nested mappings or attributes; a callable at
    the end of the path is invoked. ``$${`` yields a literal ``${``.
    """

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        self._context = {**default_context(), **(context or {})}

    def lookup(self, ref: str) -> Any:
        """Return the value a dotted reference points at."""
        current: Any = self._context
        for part in ref.split("."):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            elif hasattr(current, part) and not isinstance(current, Mapping):
                current = getattr(current, part)
            else:
                raise ValueError(f"undefined variable '{ref}'")

        if callable(current) and not isinstance(current, type):
            current = current()
        return current

    def expand(self, value: str) -> Any:
        """Expand references in a single string.

        A string that is exactly one reference keeps the referenced type;
        embedded references are stringified.
        """
        if "${" not in value:
            return value

        match = _FULL_PATTERN.fullmatch(value)
        if match:
            return self.lookup(match.group(1).strip())

        def _replace(m: re.Match) -> str:  # type: ignore[type-arg]
            if m.group(0) == "$${":
                return "${"
            return str(self.lookup(m.group(2).strip()))

        return _INTERP_PATTERN.sub(_replace, value)

    def resolve(self, data: Any) -> Any:
        """Recursively expand every string in dicts and lists."""
        if isinstance(data, dict):
            return {k: self.resolve(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self.resolve(item) for item in data]
        if isinstance(data, str):
            return self.expand(data)
        return data
