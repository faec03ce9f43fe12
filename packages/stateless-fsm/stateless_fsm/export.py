"""Graphviz export of a transition list."""
from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Iterable, Sequence

from stateless_fsm.types import ExportError, Transition

logger = logging.getLogger(__name__)

DEFAULT_EXTRA = ("-Gsize=10,5", "-Gdpi=200")

_HEADER = """digraph StateMachine {

\trankdir=LR
\tnode[width=1 fixedsize=true shape=circle style=filled fillcolor="darkorchid1" ]
"""


def _quote(token: object) -> str:
    text = str(token).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def to_dot(transitions: Iterable[Transition]) -> str:
    """Return a DOT digraph with one ``event | action`` edge per rule."""
    lines = [_HEADER]
    for t in transitions:
        label = _quote(f"{t.event} | {t.action or ''}")
        lines.append(
            f"\t{_quote(t.from_state)} -> {_quote(t.to_state)} [label={label}]"
        )
    lines.append("}\n")
    return "\n".join(lines)


def render(
    dot: str,
    outfile: str,
    format: str = "png",
    layout: str = "dot",
    scale: str = "72",
    extra: Sequence[str] | str = DEFAULT_EXTRA,
    executable: str = "dot",
) -> None:
    """Pipe ``dot`` through the Graphviz executable into ``outfile``.

    ``extra`` holds additional Graphviz flags, either as a sequence or as a
    single shell-style string. Raises ExportError if that string cannot be
    split, or if the executable is missing, cannot be started or exits
    non-zero.
    """
    if isinstance(extra, str):
        try:
            extra = shlex.split(extra)
        except ValueError as exc:
            raise ExportError(f"invalid graphviz options {extra!r}: {exc}") from exc
    cmd = [
        executable,
        f"-o{outfile}",
        f"-T{format}",
        f"-K{layout}",
        f"-s{scale}",
        *extra,
    ]
    logger.debug("rendering diagram: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, input=dot, text=True, capture_output=True, check=True)
    except FileNotFoundError as exc:
        raise ExportError(f"graphviz executable not found: {executable}") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise ExportError(
            f"{executable} exited with status {exc.returncode}: {stderr}"
        ) from exc
    except OSError as exc:
        raise ExportError(f"failed to run {executable}: {exc}") from exc
