"""Transition rule and error types."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Transition:
    """One legal move: ``from_state`` + ``event`` -> ``to_state``.

    ``action`` names the business logic the delegate runs for this move.
    An empty action is a pure relabeling and never reaches the delegate.

    States, events and actions are opaque tokens. Strings are the norm, but
    any hashable value works: the engine only compares them for equality.
    """

    from_state: str
    event: str
    to_state: str
    action: str = ""

    @property
    def has_action(self) -> bool:
        return bool(self.action)


class FSMError(Exception):
    """Base class for errors raised by the state machine engine."""


class NoTransitionError(FSMError, LookupError):
    """Raised when no rule matches (current_state, event)."""

    def __init__(self, bad_event: str, current_state: str) -> None:
        self._bad_event = bad_event
        self._current_state = current_state
        super().__init__(
            f"state machine error: cannot find transition for event "
            f"[{bad_event}] when in state [{current_state}]"
        )

    @property
    def bad_event(self) -> str:
        return self._bad_event

    @property
    def current_state(self) -> str:
        return self._current_state


class ActionError(FSMError):
    """Raised by an action to signal that the transition failed.

    The delegate reports it through ``on_action_failure`` and re-raises it.
    The entity is expected to remain in its from-state.
    """


class DuplicateTransitionError(FSMError, ValueError):
    """Raised by a strict table when two rules share (from_state, event)."""

    def __init__(self, first: Transition, duplicate: Transition) -> None:
        self.first = first
        self.duplicate = duplicate
        super().__init__(
            f"duplicate transition for event [{duplicate.event}] in state "
            f"[{duplicate.from_state}]: {duplicate!r} is shadowed by {first!r}"
        )


class ExportError(OSError):
    """Raised when the external diagram renderer cannot be run or fails."""
