"""stateless-fsm - A state machine engine that keeps no entity state."""
from __future__ import annotations

from stateless_fsm.actions import ActionProcessor, Actions
from stateless_fsm.delegate import DefaultDelegate, Delegate, EventProcessor
from stateless_fsm.export import render, to_dot
from stateless_fsm.loader import load_transitions, parse_transitions
from stateless_fsm.machine import StateMachine
from stateless_fsm.table import TransitionTable
from stateless_fsm.types import (
    ActionError,
    DuplicateTransitionError,
    ExportError,
    FSMError,
    NoTransitionError,
    Transition,
)

__all__ = [
    "StateMachine",
    "Transition",
    "TransitionTable",
    "Delegate",
    "EventProcessor",
    "DefaultDelegate",
    "Actions",
    "ActionProcessor",
    "FSMError",
    "NoTransitionError",
    "ActionError",
    "DuplicateTransitionError",
    "ExportError",
    "to_dot",
    "render",
    "load_transitions",
    "parse_transitions",
]
