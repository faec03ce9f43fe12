"""Actions registry and a processor that dispatches through it."""
from __future__ import annotations

from typing import Any, Callable

from stateless_fsm.types import ActionError

ActionFn = Callable[[str, str, tuple[Any, ...]], None]


class Actions:
    """Maps action name strings to callables ``fn(from_state, to_state, args)``."""

    def __init__(self) -> None:
        self._actions: dict[str, ActionFn] = {}

    def register(self, name: str, fn: ActionFn) -> None:
        """Register a named action. Overwrites if already registered."""
        self._actions[name] = fn

    def run(self, name: str, from_state: str, to_state: str, args: tuple[Any, ...]) -> None:
        """Run an action. Raises KeyError if not registered."""
        self._actions[name](from_state, to_state, args)

    def has(self, name: str) -> bool:
        """Check if action name is registered."""
        return name in self._actions

    def names(self) -> list[str]:
        """List all registered action names."""
        return list(self._actions)


class ActionProcessor:
    """EventProcessor built from an Actions registry and optional hooks.

    Handy for Mealy-style machines: put the logic in registered actions and
    pass hooks only where entry/exit bookkeeping is needed.
    """

    def __init__(
        self,
        actions: Actions,
        on_exit: Callable[[str, tuple[Any, ...]], None] | None = None,
        on_enter: Callable[[str, tuple[Any, ...]], None] | None = None,
        on_failure: Callable[[str, str, str, tuple[Any, ...], ActionError], None] | None = None,
    ) -> None:
        self._actions = actions
        self._on_exit = on_exit
        self._on_enter = on_enter
        self._on_failure = on_failure

    def on_exit(self, from_state: str, args: tuple[Any, ...]) -> None:
        if self._on_exit is not None:
            self._on_exit(from_state, args)

    def action(self, action: str, from_state: str, to_state: str, args: tuple[Any, ...]) -> None:
        self._actions.run(action, from_state, to_state, args)

    def on_action_failure(
        self,
        action: str,
        from_state: str,
        to_state: str,
        args: tuple[Any, ...],
        err: ActionError,
    ) -> None:
        if self._on_failure is not None:
            self._on_failure(action, from_state, to_state, args, err)

    def on_enter(self, to_state: str, args: tuple[Any, ...]) -> None:
        if self._on_enter is not None:
            self._on_enter(to_state, args)
