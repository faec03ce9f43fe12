"""TransitionTable - ordered, read-only rule set."""
from __future__ import annotations

from typing import Iterable, Iterator

from stateless_fsm.types import DuplicateTransitionError, Transition


class TransitionTable:
    """Ordered collection of transitions with first-match-wins lookup.

    Rules are fixed at construction. When two rules share the same
    (from_state, event) pair, the one inserted first is the one ``lookup``
    returns; the later rule is reported by ``duplicates()``. Pass
    ``strict=True`` to reject such tables instead.
    """

    def __init__(self, transitions: Iterable[Transition] = (), *, strict: bool = False) -> None:
        self._transitions: tuple[Transition, ...] = tuple(transitions)
        self._index: dict[tuple[str, str], Transition] = {}
        self._duplicates: list[Transition] = []
        for t in self._transitions:
            key = (t.from_state, t.event)
            first = self._index.get(key)
            if first is None:
                self._index[key] = t
                continue
            if strict:
                raise DuplicateTransitionError(first, t)
            self._duplicates.append(t)

    def lookup(self, from_state: str, event: str) -> Transition | None:
        """Return the first rule matching both fields, or None."""
        return self._index.get((from_state, event))

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._transitions

    def states(self) -> list[str]:
        """All states named by any rule, in first-seen order."""
        seen: dict[str, None] = {}
        for t in self._transitions:
            seen.setdefault(t.from_state)
            seen.setdefault(t.to_state)
        return list(seen)

    def events(self) -> list[str]:
        """All events named by any rule, in first-seen order."""
        return list(dict.fromkeys(t.event for t in self._transitions))

    def events_from(self, state: str) -> list[str]:
        """Events with a rule out of ``state``, in insertion order."""
        return list(dict.fromkeys(
            t.event for t in self._transitions if t.from_state == state
        ))

    def duplicates(self) -> list[Transition]:
        """Rules that can never match because an earlier rule shadows them."""
        return list(self._duplicates)

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __contains__(self, item: object) -> bool:
        return item in self._transitions

    def __repr__(self) -> str:
        return f"TransitionTable({len(self._transitions)} transitions)"
