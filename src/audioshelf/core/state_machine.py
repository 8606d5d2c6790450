# ABOUTME: Generic single-active-state machine with enter/tick/leave callbacks per state.
# ABOUTME: Enter callbacks may chain further transitions; a context-carrying variant is included.

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

S = TypeVar("S", bound=Hashable)


class UnknownStateError(LookupError):
    """Raised when a transition targets a state that was never registered."""


@dataclass(frozen=True)
class StateCallbacks:
    """The enter/tick/leave triple registered for one state.

    enter and tick return the next state, or None to stay put. leave returns
    nothing.
    """

    enter: Callable[..., Any]
    tick: Callable[..., Any]
    leave: Callable[..., None]


class StateMachine(Generic[S]):
    """Drives exactly one active state of an application-defined enumeration.

    The initial state's enter callback is not invoked on construction. Not
    thread-safe: tick() must be called from one control thread, and never
    from inside one of this machine's own callbacks.
    """

    def __init__(
        self,
        initial_state: S,
        enter: Callable[..., Any],
        tick: Callable[..., Any],
        leave: Callable[..., None],
    ) -> None:
        self._states: dict[S, StateCallbacks] = {}
        self._busy = False
        self.add_state(initial_state, enter, tick, leave)
        self._current = initial_state

    def add_state(
        self,
        state: S,
        enter: Callable[..., Any],
        tick: Callable[..., Any],
        leave: Callable[..., None],
    ) -> None:
        """Register the callbacks of a state. Re-registering replaces them."""
        self._states[state] = StateCallbacks(enter=enter, tick=tick, leave=leave)

    @property
    def current_state(self) -> S:
        """The active state."""
        return self._current

    def _invoke(self, callback: Callable[..., Any]) -> Any:
        return callback()

    def _lookup(self, state: S) -> StateCallbacks:
        try:
            return self._states[state]
        except KeyError:
            raise UnknownStateError(f"State {state!r} is not registered") from None

    def _enter_busy(self) -> None:
        if self._busy:
            raise RuntimeError("State machine re-entered from inside a callback")
        self._busy = True

    def tick(self) -> None:
        """Run the current state's tick and perform any transition it requests."""
        self._enter_busy()
        try:
            target = self._invoke(self._lookup(self._current).tick)
            self._transition(target)
        finally:
            self._busy = False

    def change_state(self, state: S) -> None:
        """Transition to a state, following any chain its enter callback starts."""
        self._enter_busy()
        try:
            self._transition(state)
        finally:
            self._busy = False

    def _transition(self, target: S | None) -> None:
        # Chained transitions run as a loop so long chains don't grow the stack
        while target is not None:
            callbacks = self._lookup(target)
            self._invoke(self._lookup(self._current).leave)
            self._current = target
            target = self._invoke(callbacks.enter)


class StateMachineWithContext(StateMachine[S]):
    """A StateMachine whose callbacks all receive a shared, mutable context object."""

    def __init__(
        self,
        context: Any,
        initial_state: S,
        enter: Callable[[Any], Any],
        tick: Callable[[Any], Any],
        leave: Callable[[Any], None],
    ) -> None:
        self._context = context
        super().__init__(initial_state, enter, tick, leave)

    @property
    def context(self) -> Any:
        """The context passed to every callback."""
        return self._context

    def _invoke(self, callback: Callable[..., Any]) -> Any:
        return callback(self._context)
