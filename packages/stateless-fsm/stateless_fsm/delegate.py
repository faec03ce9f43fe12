"""Delegate protocol and the default exit/action/enter split."""
from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from stateless_fsm.types import ActionError

logger = logging.getLogger(__name__)


@runtime_checkable
class Delegate(Protocol):
    """Receives every transition that carries an action.

    One delegate serves every entity the machine processes, possibly from
    several threads at once. Any shared resource it touches needs its own
    locking.
    """

    def handle_event(
        self, action: str, from_state: str, to_state: str, args: tuple[Any, ...],
    ) -> None:
        ...


@runtime_checkable
class EventProcessor(Protocol):
    """Per-phase hooks driven by DefaultDelegate.

    Moore-style machines put their logic in ``on_exit``/``on_enter`` and
    leave ``action`` trivial. Mealy-style machines do the opposite. Both
    can be mixed freely.
    """

    def on_exit(self, from_state: str, args: tuple[Any, ...]) -> None:
        """Called before the action when leaving ``from_state``."""
        ...

    def action(
        self, action: str, from_state: str, to_state: str, args: tuple[Any, ...],
    ) -> None:
        """Run the named action. Raise ActionError to fail the transition."""
        ...

    def on_action_failure(
        self,
        action: str,
        from_state: str,
        to_state: str,
        args: tuple[Any, ...],
        err: ActionError,
    ) -> None:
        """Observe a failed action before the error reaches the caller."""
        ...

    def on_enter(self, to_state: str, args: tuple[Any, ...]) -> None:
        """Called after a successful action; record ``to_state`` here."""
        ...


class DefaultDelegate:
    """Splits each transition into on_exit, action and on_enter.

    Exit and enter only fire on a genuine state change; a self-transition
    runs the action alone. When the action raises ActionError the processor
    sees it through ``on_action_failure``, ``on_enter`` is skipped and the
    same exception propagates to the trigger caller. Nothing is rolled back.
    """

    def __init__(self, processor: EventProcessor) -> None:
        self._processor = processor

    @property
    def processor(self) -> EventProcessor:
        return self._processor

    def handle_event(
        self, action: str, from_state: str, to_state: str, args: tuple[Any, ...],
    ) -> None:
        p = self._processor
        changing = from_state != to_state

        if changing:
            p.on_exit(from_state, args)

        try:
            p.action(action, from_state, to_state, args)
        except ActionError as err:
            logger.warning(
                "action %r failed for %s -> %s: %s", action, from_state, to_state, err,
            )
            p.on_action_failure(action, from_state, to_state, args, err)
            raise

        if changing:
            p.on_enter(to_state, args)
