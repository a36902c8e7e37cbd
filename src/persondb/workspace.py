"""Workspace: a typed collection of stacks parsed from configuration blocks."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar, overload

from .blueprints import Blueprint
from .config import ProviderConfig
from .registry import PROVIDER_NAME
from .resolve import Resolver
from .spec import ImportSpec, ResourceSpec, Specification
from .specop import Absent, Ensure, Import, Present, SpecOp
from .stacks import Stack

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Stack)

# strategies run in this order within a block
_STRATEGY_MAP: dict[str, tuple[type[SpecOp], type[Specification]]] = {
    "import": (Import, ImportSpec),
    "present": (Present, ResourceSpec),
    "ensure": (Ensure, ResourceSpec),
    "absent": (Absent, ResourceSpec),
}

_STRUCTURAL_KEYS = {"use", "include"} | set(_STRATEGY_MAP)


def _clean(block: dict[str, Any]) -> dict[str, Any]:
    """Drop parser metadata keys such as ``__start_line__``."""
    return {k: v for k, v in block.items() if not k.startswith("__")}


@dataclass
class OperationRef:
    """A strategy applied to one resource type with its attributes."""

    strategy: str
    type_name: str
    attrs: dict[str, Any]

    def resolve(self, resolver: Resolver) -> SpecOp:
        strategy_cls, spec_cls = _STRATEGY_MAP[self.strategy]
        logger.debug("Decoding %s '%s'", self.strategy, self.type_name)
        spec = spec_cls(self.type_name, resolver.resolve(self.attrs))
        return strategy_cls(spec)


@dataclass
class BlueprintRef:
    """A named group of operations with optional includes."""

    name: str
    includes: list[str] = field(default_factory=list)
    ops: list[OperationRef] = field(default_factory=list)

    def resolve(
        self,
        workspace: Workspace,
        _resolving: set[str] | None = None,
    ) -> Blueprint:
        resolving = _resolving if _resolving is not None else set()
        if self.name in resolving:
            raise ValueError(f"Circular include detected: '{self.name}'")
        resolving.add(self.name)

        all_ops: list[SpecOp] = []
        for inc_name in self.includes:
            if inc_name not in workspace.blueprints:
                raise ValueError(f"Blueprint '{self.name}' includes unknown blueprint: '{inc_name}'")
            logger.debug("Blueprint '%s' includes '%s'", self.name, inc_name)
            included = workspace.blueprints[inc_name].resolve(workspace, resolving)
            all_ops.extend(included.ops)

        all_ops.extend(op.resolve(workspace.resolver) for op in self.ops)

        resolving.discard(self.name)
        return Blueprint(name=self.name, ops=all_ops)


def _parse_ops(block_data: dict[str, Any]) -> list[OperationRef]:
    """Collect strategy blocks from a blueprint or stack block.

    Parsed structure of strategy blocks:
        {"ensure": [{"persondb_person": {"person_id": "p1", ...}}, ...], ...}
    """
    ops: list[OperationRef] = []
    for strategy_name in _STRATEGY_MAP:
        for spec_block in block_data.get(strategy_name, []):
            for type_name, attrs in spec_block.items():
                ops.append(OperationRef(strategy_name, type_name, _clean(dict(attrs))))
    return ops


class Workspace(Mapping[str, S]):
    """Accumulates parsed configuration and builds stacks on access."""

    def __init__(
        self,
        stack_type: type[S] = Stack,  # type: ignore[assignment]
        context: dict[str, Any] | None = None,
    ) -> None:
        self._stack_type = stack_type
        self.resolver = Resolver(context)
        self._provider_data: dict[str, Any] | None = None
        self._blueprint_refs: dict[str, BlueprintRef] = {}
        self._pending_stacks: dict[str, dict[str, Any]] = {}

    @property
    def blueprints(self) -> dict[str, BlueprintRef]:
        """Return the blueprint ref registry."""
        return self._blueprint_refs

    @property
    def provider_config(self) -> ProviderConfig:
        """Return the resolved provider configuration (empty if not declared)."""
        if self._provider_data is None:
            return ProviderConfig()
        return ProviderConfig(**self.resolver.resolve(self._provider_data))

    def load(self, data: dict[str, Any]) -> None:
        """Extract provider, blueprint and stack blocks from a parsed data dict.

        Raises ValueError on duplicate names or a foreign provider block.
        """
        for provider_block in data.get("provider", []):
            for provider_name, provider_data in provider_block.items():
                if provider_name != PROVIDER_NAME:
                    raise ValueError(f"Unsupported provider: '{provider_name}'")
                if self._provider_data is not None:
                    raise ValueError(f"Duplicate provider: '{provider_name}'")
                self._provider_data = _clean(provider_data)

        for bp_block in data.get("blueprint", []):
            for bp_name, bp_data in bp_block.items():
                if bp_name in self._blueprint_refs:
                    raise ValueError(f"Duplicate blueprint: '{bp_name}'")
                logger.debug("Found blueprint '%s'", bp_name)
                self._blueprint_refs[bp_name] = BlueprintRef(
                    name=bp_name,
                    includes=list(bp_data.get("include", [])),
                    ops=_parse_ops(bp_data),
                )

        for stack_block in data.get("stack", []):
            for stack_name, stack_data in stack_block.items():
                if stack_name in self._pending_stacks:
                    raise ValueError(f"Duplicate stack: '{stack_name}'")
                logger.debug("Found stack '%s'", stack_name)
                self._pending_stacks[stack_name] = _clean(stack_data)

    def _build_stack(self, name: str, data: dict[str, Any]) -> S:
        logger.debug("Building stack '%s' as %s", name, self._stack_type.__name__)
        blueprints: list[Blueprint] = []
        for bp_name in data.get("use", []):
            if bp_name not in self._blueprint_refs:
                raise ValueError(f"Stack '{name}' references unknown blueprint: '{bp_name}'")
            blueprints.append(self._blueprint_refs[bp_name].resolve(self))

        inline = BlueprintRef(name=f"{name}:inline", ops=_parse_ops(data))
        if inline.ops:
            blueprints.append(inline.resolve(self))

        kwargs: dict[str, Any] = {
            "name": name,
            "blueprints": blueprints,
            "provider": self.provider_config,
        }
        for key, value in data.items():
            if key not in _STRUCTURAL_KEYS:
                kwargs[key] = self.resolver.resolve(value)

        return self._stack_type(**kwargs)

    def __getitem__(self, name: str) -> S:
        if name not in self._pending_stacks:
            raise KeyError(name)
        return self._build_stack(name, self._pending_stacks[name])

    def __contains__(self, name: object) -> bool:
        return name in self._pending_stacks

    def __iter__(self) -> Iterator[str]:
        return iter(self._pending_stacks)

    def __len__(self) -> int:
        return len(self._pending_stacks)

    @overload
    def get(self, name: str) -> S | None: ...
    @overload
    def get(self, name: str, default: S) -> S: ...
    @overload
    def get(self, name: str, default: None) -> S | None: ...
    def get(self, name: str, default: Any = None) -> S | None:
        if name not in self._pending_stacks:
            return default
        return self[name]

    def filter(self, names: Iterable[str]) -> list[S]:
        """Return stacks matching the given names, preserving input order."""
        return [self[n] for n in names if n in self._pending_stacks]

    def __repr__(self) -> str:
        type_name = self._stack_type.__name__
        bp_count = len(self._blueprint_refs)
        stack_count = len(self._pending_stacks)
        return f"Workspace(stack_type={type_name}, blueprints={bp_count}, stacks={stack_count})"
