"""Reconciliation strategies applied to specifications."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .context import Context
from .spec import Specification

logger = logging.getLogger(__name__)


class SpecOp(ABC):
    """Wraps a Specification with conditional execution logic."""

    def __init__(self, spec: Specification) -> None:
        self.spec = spec

    @property
    def address(self) -> str:
        return self.spec.address

    @abstractmethod
    def __call__(self, ctx: Context) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec!r})"


class Present(SpecOp):
    """Create only if the resource doesn't exist."""

    def __call__(self, ctx: Context) -> None:
        if self.spec.exists(ctx):
            logger.debug("Skipping %s; already exists", self.address)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would create %s", self.address)
        else:
            logger.info("Creating %s", self.address)
            self.spec.apply(ctx)


class Ensure(SpecOp):
    """Create or update until current state matches."""

    def __call__(self, ctx: Context) -> None:
        if self.spec.equals(ctx):
            logger.debug("Skipping %s; up to date", self.address)
            return
        action = "update" if self.spec.exists(ctx) else "create"
        if ctx.dry_run:
            logger.info("[DRY RUN] Would %s %s", action, self.address)
        else:
            logger.info("Applying %s (%s)", self.address, action)
            self.spec.apply(ctx)


class Absent(SpecOp):
    """Delete if the resource exists."""

    def __call__(self, ctx: Context) -> None:
        if not self.spec.exists(ctx):
            logger.debug("Skipping removal of %s; not present", self.address)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would delete %s", self.address)
        else:
            logger.info("Deleting %s", self.address)
            self.spec.remove(ctx)


class Import(SpecOp):
    """Adopt an existing record unless it is already managed."""

    def __call__(self, ctx: Context) -> None:
        if self.spec.exists(ctx):
            logger.debug("Skipping import of %s; already managed", self.address)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would import %s", self.address)
        else:
            logger.info("Importing %s", self.address)
            self.spec.apply(ctx)
