"""Turnstile -- many turnstiles, one state machine.

Demonstrates:
- Declaring transitions as plain (from, event, to, action) records
- An EventProcessor with exit/action/enter hooks
- Entities that keep their own state while the machine keeps none
- A failing action that leaves the entity where it was
- Exporting the diagram (requires Graphviz's ``dot`` on PATH)

Run: python examples/turnstile.py [--export turnstile.png]
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field

from stateless_fsm import (
    ActionError,
    DefaultDelegate,
    ExportError,
    NoTransitionError,
    StateMachine,
    Transition,
)

logger = logging.getLogger("turnstile")


@dataclass
class Turnstile:
    id: int
    state: str = "Locked"
    event_count: int = 0
    coin_count: int = 0
    pass_count: int = 0
    states: list[str] = field(default_factory=lambda: ["Locked"])


class TurnstileProcessor:
    def on_exit(self, from_state, args):
        t: Turnstile = args[0]
        if t.state != from_state:
            raise RuntimeError(
                f"turnstile {t.id} is in {t.state}, expected {from_state}; changed outside the machine?"
            )
        logger.info("turnstile %d leaves %s", t.id, from_state)

    def action(self, action, from_state, to_state, args):
        t: Turnstile = args[0]
        t.event_count += 1
        if action == "pass":
            t.pass_count += 1
        elif action in ("check", "repeat-check"):
            if t.coin_count > 0:
                raise ActionError("turnstile temporarily out of order")
            t.coin_count += 1

    def on_action_failure(self, action, from_state, to_state, args, err):
        t: Turnstile = args[0]
        logger.info("turnstile %d failed %s -> %s: %s", t.id, from_state, to_state, err)

    def on_enter(self, to_state, args):
        t: Turnstile = args[0]
        t.state = to_state
        t.states.append(to_state)
        logger.info("turnstile %d is now %s", t.id, to_state)


def build_fsm() -> StateMachine:
    return StateMachine(
        DefaultDelegate(TurnstileProcessor()),
        Transition("Locked", "Coin", "Unlocked", "check"),
        Transition("Locked", "Push", "Locked", "invalid-push"),
        Transition("Unlocked", "Push", "Locked", "pass"),
        Transition("Unlocked", "Coin", "Unlocked", "repeat-check"),
    )


def main() -> None:
    p = argparse.ArgumentParser(description="Turnstile state machine demo")
    p.add_argument("--export", metavar="FILE", default=None, help="Render the diagram to FILE (PNG)")
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)-8s | %(message)s")

    fsm = build_fsm()
    turnstiles = [Turnstile(id=1), Turnstile(id=2)]

    for event in ("Push", "Coin", "Coin", "Push", "Teleport"):
        for ts in turnstiles:
            try:
                fsm.trigger(ts.state, event, ts)
            except ActionError as exc:
                print(f"  turnstile {ts.id}: {event} rejected ({exc})")
            except NoTransitionError as exc:
                print(f"  turnstile {ts.id}: no '{exc.bad_event}' in state {exc.current_state}")

    for ts in turnstiles:
        print(f"final: {ts}")

    if args.export:
        try:
            fsm.export(args.export)
        except ExportError as exc:
            print(f"export failed: {exc}")
        else:
            print(f"diagram written to {args.export}")


if __name__ == "__main__":
    main()
