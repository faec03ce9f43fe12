"""StateMachine - stateless transition lookup and dispatch."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from stateless_fsm.delegate import Delegate
from stateless_fsm.export import render, to_dot
from stateless_fsm.table import TransitionTable
from stateless_fsm.types import NoTransitionError, Transition

logger = logging.getLogger(__name__)


class StateMachine:
    """A state machine shared by any number of entities.

    The machine never stores an entity's state. Each ``trigger`` call is
    given the entity's current state, resolves the matching rule, and hands
    the rule's action to the delegate. The delegate's ``on_enter`` is where
    the entity records its new state.

    The rule set and delegate are fixed at construction, so one instance can
    be triggered concurrently from several threads for different entities.
    Serializing calls for the same entity is up to the caller.
    """

    def __init__(self, delegate: Delegate, *transitions: Transition, strict: bool = False) -> None:
        self._delegate = delegate
        self._table = TransitionTable(transitions, strict=strict)

    @classmethod
    def from_table(
        cls, delegate: Delegate, table: TransitionTable | Iterable[Transition], *, strict: bool = False,
    ) -> StateMachine:
        """Build a machine from a prepared table or any iterable of rules."""
        machine = cls(delegate, strict=strict)
        if isinstance(table, TransitionTable) and not strict:
            machine._table = table
        else:
            machine._table = TransitionTable(table, strict=strict)
        return machine

    @property
    def delegate(self) -> Delegate:
        return self._delegate

    @property
    def table(self) -> TransitionTable:
        return self._table

    def trigger(self, current_state: str, event: str, *args: Any) -> None:
        """Fire ``event`` for an entity currently in ``current_state``.

        ``args`` are passed to the delegate untouched, typically the entity
        itself. Raises NoTransitionError when no rule matches. Errors raised
        by the delegate propagate unchanged.
        """
        t = self._table.lookup(current_state, event)
        if t is None:
            logger.debug("no transition for event %r in state %r", event, current_state)
            raise NoTransitionError(event, current_state)

        if not t.has_action:
            logger.debug("%s --%s--> %s (no action)", current_state, event, t.to_state)
            return

        logger.debug("%s --%s--> %s [%s]", current_state, event, t.to_state, t.action)
        self._delegate.handle_event(t.action, current_state, t.to_state, args)

    def lookup(self, current_state: str, event: str) -> Transition | None:
        """Return the rule ``trigger`` would use, or None."""
        return self._table.lookup(current_state, event)

    def can_trigger(self, current_state: str, event: str) -> bool:
        return self._table.lookup(current_state, event) is not None

    def to_dot(self) -> str:
        return to_dot(self._table)

    def export(self, outfile: str) -> None:
        """Render the state diagram to a PNG file with Graphviz."""
        self.export_with_details(outfile, "png", "dot", "72", "-Gsize=10,5 -Gdpi=200")

    def export_with_details(
        self, outfile: str, format: str, layout: str, scale: str, more: str,
    ) -> None:
        """Render the state diagram with explicit Graphviz options.

        ``more`` is a string of extra Graphviz flags, split shell-style.
        Raises ExportError if rendering fails.
        """
        render(self.to_dot(), outfile, format=format, layout=layout, scale=scale, extra=more)
