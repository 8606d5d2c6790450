# ABOUTME: Unit tests for the generic state machine.
# ABOUTME: Covers tick transitions, enter chaining, unknown states, re-entry, and the context variant.

import enum

import pytest

from audioshelf.core.state_machine import (
    StateMachine,
    StateMachineWithContext,
    UnknownStateError,
)


class Light(enum.Enum):
    RED = 1
    GREEN = 2
    YELLOW = 3
    OFF = 4


def _none(*_args):
    return None


class Recorder:
    """Builds callbacks that log their invocations."""

    def __init__(self) -> None:
        self.log: list[str] = []

    def enter(self, name: str, result=None):
        def callback():
            self.log.append(f"enter:{name}")
            return result
        return callback

    def tick(self, name: str, result=None):
        def callback():
            self.log.append(f"tick:{name}")
            return result
        return callback

    def leave(self, name: str):
        def callback():
            self.log.append(f"leave:{name}")
        return callback


class TestStateMachine:
    """Tests for StateMachine tick and transition behavior."""

    def test_initial_state_without_enter(self) -> None:
        rec = Recorder()
        sm = StateMachine(Light.RED, rec.enter("red"), rec.tick("red"), rec.leave("red"))
        assert sm.current_state is Light.RED
        assert rec.log == []

    def test_tick_without_transition_stays(self) -> None:
        rec = Recorder()
        sm = StateMachine(Light.RED, rec.enter("red"), rec.tick("red"), rec.leave("red"))
        sm.tick()
        assert sm.current_state is Light.RED
        assert rec.log == ["tick:red"]

    def test_tick_transition_calls_leave_then_enter(self) -> None:
        rec = Recorder()
        sm = StateMachine(
            Light.RED, rec.enter("red"), rec.tick("red", Light.GREEN), rec.leave("red")
        )
        sm.add_state(Light.GREEN, rec.enter("green"), rec.tick("green"), rec.leave("green"))
        sm.tick()
        assert sm.current_state is Light.GREEN
        assert rec.log == ["tick:red", "leave:red", "enter:green"]

    def test_enter_chains_transitions(self) -> None:
        rec = Recorder()
        sm = StateMachine(
            Light.RED, rec.enter("red"), rec.tick("red", Light.GREEN), rec.leave("red")
        )
        sm.add_state(
            Light.GREEN, rec.enter("green", Light.YELLOW), rec.tick("green"), rec.leave("green")
        )
        sm.add_state(Light.YELLOW, rec.enter("yellow"), rec.tick("yellow"), rec.leave("yellow"))
        sm.tick()
        assert sm.current_state is Light.YELLOW
        assert rec.log == [
            "tick:red", "leave:red", "enter:green", "leave:green", "enter:yellow",
        ]

    def test_long_chain_does_not_recurse(self) -> None:
        """A chain far longer than the recursion limit still completes."""
        remaining = {"count": 5000}

        def bounce():
            remaining["count"] -= 1
            if remaining["count"] <= 0:
                return None
            return Light.GREEN if sm.current_state is Light.RED else Light.RED

        sm = StateMachine(Light.RED, bounce, lambda: Light.GREEN, _none)
        sm.add_state(Light.GREEN, bounce, _none, _none)
        sm.tick()
        assert remaining["count"] == 0

    def test_change_state_directly(self) -> None:
        sm = StateMachine(Light.RED, _none, _none, _none)
        sm.add_state(Light.OFF, _none, _none, _none)
        sm.change_state(Light.OFF)
        assert sm.current_state is Light.OFF

    def test_unknown_state_fails_fast(self) -> None:
        rec = Recorder()
        sm = StateMachine(
            Light.RED, rec.enter("red"), rec.tick("red", Light.OFF), rec.leave("red")
        )
        with pytest.raises(UnknownStateError):
            sm.tick()
        assert sm.current_state is Light.RED
        assert "leave:red" not in rec.log

    def test_unknown_state_is_lookup_error(self) -> None:
        assert issubclass(UnknownStateError, LookupError)

    def test_reentrant_tick_is_rejected(self) -> None:
        def nested_tick():
            sm.tick()

        sm = StateMachine(Light.RED, _none, nested_tick, _none)
        with pytest.raises(RuntimeError):
            sm.tick()

    def test_machine_usable_after_failed_tick(self) -> None:
        sm = StateMachine(Light.RED, _none, lambda: Light.OFF, _none)
        with pytest.raises(UnknownStateError):
            sm.tick()
        sm.add_state(Light.OFF, _none, _none, _none)
        sm.tick()
        assert sm.current_state is Light.OFF


class TestStateMachineWithContext:
    """Tests for the context-carrying variant."""

    def test_callbacks_receive_context(self) -> None:
        context = {"ticks": 0, "entered": []}

        def tick(ctx):
            ctx["ticks"] += 1
            return Light.GREEN if ctx["ticks"] >= 2 else None

        def enter_green(ctx):
            ctx["entered"].append("green")

        sm = StateMachineWithContext(context, Light.RED, _none, tick, _none)
        sm.add_state(Light.GREEN, enter_green, _none, _none)

        sm.tick()
        assert sm.current_state is Light.RED
        sm.tick()
        assert sm.current_state is Light.GREEN
        assert context == {"ticks": 2, "entered": ["green"]}
        assert sm.context is context

    def test_context_chaining(self) -> None:
        log: list[str] = []
        sm = StateMachineWithContext(
            log, Light.RED, _none, lambda ctx: Light.GREEN, lambda ctx: ctx.append("leave red")
        )
        sm.add_state(
            Light.GREEN,
            lambda ctx: ctx.append("enter green") or Light.YELLOW,
            _none,
            lambda ctx: ctx.append("leave green"),
        )
        sm.add_state(Light.YELLOW, lambda ctx: ctx.append("enter yellow"), _none, _none)
        sm.tick()
        assert sm.current_state is Light.YELLOW
        assert log == ["leave red", "enter green", "leave green", "enter yellow"]
