"""Load transition rules from YAML or JSON files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from stateless_fsm.types import Transition

_RULE_KEYS = {"from", "event", "to", "action"}


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Transition file not found at {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(stream)
        if suffix == ".json":
            return json.load(stream)
        raise ValueError(f"Unsupported transition file format: {suffix}")


def _parse_rule(index: int, raw: Any) -> Transition:
    if isinstance(raw, dict):
        unknown = set(raw) - _RULE_KEYS
        if unknown:
            raise ValueError(
                f"Transition #{index} has unknown keys: {', '.join(sorted(map(str, unknown)))}"
            )
        try:
            from_state, event, to_state = raw["from"], raw["event"], raw["to"]
        except KeyError as exc:
            raise ValueError(f"Transition #{index} is missing key {exc.args[0]!r}") from exc
        action = raw.get("action")
    elif isinstance(raw, (list, tuple)) and len(raw) in (3, 4):
        from_state, event, to_state = raw[0], raw[1], raw[2]
        action = raw[3] if len(raw) == 4 else None
    else:
        raise ValueError(
            f"Transition #{index} must be a mapping or a [from, event, to, action] list, "
            f"got {raw!r}"
        )

    for name, value in (("from", from_state), ("event", event), ("to", to_state), ("action", action)):
        if isinstance(value, bool):
            raise ValueError(
                f"Transition #{index} has a boolean {name!r} ({value}); YAML reads unquoted "
                f"on/off/yes/no as booleans, quote the value to use it as a name"
            )
    for name, value in (("from", from_state), ("event", event), ("to", to_state)):
        if value is None or value == "":
            raise ValueError(f"Transition #{index} has an empty {name!r}")

    return Transition(
        from_state=str(from_state),
        event=str(event),
        to_state=str(to_state),
        action="" if action is None else str(action),
    )


def parse_transitions(raw: Any) -> list[Transition]:
    """Build transitions from already-loaded data.

    Accepts a list of rules or a mapping with a ``transitions`` list. Each
    rule is a mapping with ``from``/``event``/``to`` and optional ``action``,
    or a 3- or 4-item list in that order.
    """
    if isinstance(raw, dict):
        if "transitions" not in raw:
            raise ValueError("Transition config mapping must contain a 'transitions' list.")
        raw = raw["transitions"]
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"Transitions must be a list, got {type(raw).__name__}")
    return [_parse_rule(i, rule) for i, rule in enumerate(raw)]


def load_transitions(path: Path | str) -> list[Transition]:
    """Load transitions from a ``.yaml``/``.yml`` or ``.json`` file."""
    return parse_transitions(_load_raw(_normalize_path(path)))
