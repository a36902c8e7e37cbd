"""HCL loading: parse .hcl files into a Workspace of stacks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import hcl2
import jinja2
from lark.exceptions import LarkError

from .stacks import Stack
from .workspace import Workspace

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Stack)


def load(
    file: str | Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load and parse a single HCL file, rendering Jinja2 templates with context."""
    file = Path(file)
    text = file.read_text()
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    try:
        text = env.from_string(text).render(context or {})
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc
    try:
        return hcl2.loads(text)
    except LarkError as exc:
        raise ValueError(f"{file}: invalid HCL: {exc}") from exc


def scan(
    path: str | Path,
    *,
    stack_type: type[S] = Stack,  # type: ignore[assignment]
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> Workspace[S]:
    """Load every .hcl file under ``path`` (or a single file) into a Workspace.

    Files are loaded in sorted order so duplicate detection is deterministic.
    """
    path = Path(path)
    if path.is_file():
        files = [path]
    elif path.is_dir():
        files = sorted(path.rglob("*.hcl") if recurse else path.glob("*.hcl"))
    else:
        raise FileNotFoundError(f"No such file or directory: '{path}'")

    ws: Workspace[S] = Workspace(stack_type=stack_type, context=context)
    for file in files:
        logger.debug("Loading %s", file)
        ws.load(load(file, context=context))
    return ws
