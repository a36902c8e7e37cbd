"""Runtime execution context for a reconciliation run."""

from __future__ import annotations

from typing import Any

from .provider import Provider
from .state import State


class Context:
    """Provider and state passed through the reconciliation chain."""

    def __init__(self, provider: Provider, state: State, *, dry_run: bool = False) -> None:
        self.provider = provider
        self.state = state
        self.dry_run = dry_run
        # address -> refreshed model, or None once found missing
        self.refreshed: dict[str, Any] = {}
