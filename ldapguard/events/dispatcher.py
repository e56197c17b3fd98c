"""
Synchronous event dispatcher.

Listeners register for an event class, an exact event name, or a wildcard
pattern such as ``ldapguard.auth.events.*``. Publishing an event runs every
matching listener before ``dispatch`` returns.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import structlog

logger = structlog.get_logger(__name__)

Listener = Callable[..., Any]
EventSpec = Union[str, type]


def event_name(event: Any) -> str:
    """
    Resolve the fully-qualified name of an event.

    Args:
        event: Event name, event class or event instance

    Returns:
        The name listeners are matched against
    """
    if isinstance(event, str):
        return event
    cls = event if isinstance(event, type) else type(event)
    return f"{cls.__module__}.{cls.__qualname__}"


def _wildcard_to_regex(pattern: str) -> "re.Pattern[str]":
    return re.compile("^" + re.escape(pattern).replace(r"\*", ".*") + "$")


class DispatcherInterface(ABC):
    """Interface the guard depends on for publishing events."""

    @abstractmethod
    def listen(self, events: Union[EventSpec, Sequence[EventSpec]], listener: Listener) -> None:
        """Register a listener for one or more events or wildcard patterns."""
        pass

    @abstractmethod
    def has_listeners(self, event: EventSpec) -> bool:
        """Determine if an event has any listeners, wildcards included."""
        pass

    @abstractmethod
    def has_wildcard_listeners(self, event: EventSpec) -> bool:
        """Determine if any wildcard pattern matches an event."""
        pass

    @abstractmethod
    def get_listeners(self, event: EventSpec) -> List[Listener]:
        """Get the listeners that would be called for an event."""
        pass

    @abstractmethod
    def dispatch(self, event: Any, payload: Optional[List[Any]] = None, halt: bool = False) -> Any:
        """Publish an event to its listeners."""
        pass

    @abstractmethod
    def forget(self, event: EventSpec) -> None:
        """Remove every listener registered under an event or pattern."""
        pass

    def fire(self, event: Any, payload: Optional[List[Any]] = None, halt: bool = False) -> Any:
        return self.dispatch(event, payload, halt)

    def until(self, event: Any, payload: Optional[List[Any]] = None) -> Any:
        """Dispatch an event until the first listener returns a non-None response."""
        return self.dispatch(event, payload, halt=True)


class Dispatcher(DispatcherInterface):
    """
    In-process publish/subscribe dispatcher.

    Exact listeners receive the dispatched payload as positional arguments,
    which for an event object is the event itself. Wildcard listeners receive
    the event name and the payload list. A listener returning ``False`` stops
    propagation to the listeners after it.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}
        self._wildcards: Dict[str, List[Listener]] = {}
        self._wildcard_patterns: Dict[str, "re.Pattern[str]"] = {}

    def listen(self, events: Union[EventSpec, Sequence[EventSpec]], listener: Listener) -> None:
        if isinstance(events, (str, type)):
            events = [events]

        for event in events:
            name = event_name(event)
            if "*" in name:
                self._wildcards.setdefault(name, []).append(listener)
                self._wildcard_patterns[name] = _wildcard_to_regex(name)
            else:
                self._listeners.setdefault(name, []).append(listener)

            logger.debug("Listener registered", event_name=name)

    def has_listeners(self, event: EventSpec) -> bool:
        name = event_name(event)
        return bool(self._listeners.get(name)) or self.has_wildcard_listeners(name)

    def has_wildcard_listeners(self, event: EventSpec) -> bool:
        name = event_name(event)
        return any(regex.match(name) for regex in self._wildcard_patterns.values())

    def get_listeners(self, event: EventSpec) -> List[Listener]:
        """
        Get the listeners for an event, exact listeners first.

        Wildcard listeners are returned wrapped so they are called with the
        event name and payload.
        """
        name = event_name(event)
        listeners = list(self._listeners.get(name, []))

        for pattern, regex in self._wildcard_patterns.items():
            if regex.match(name):
                listeners.extend(
                    self._make_wildcard_listener(listener, name)
                    for listener in self._wildcards[pattern]
                )

        return listeners

    def dispatch(self, event: Any, payload: Optional[List[Any]] = None, halt: bool = False) -> Any:
        name = event_name(event)

        if payload is None:
            payload = [] if isinstance(event, str) else [event]
        elif not isinstance(payload, list):
            payload = [payload]

        responses = []

        for listener in self.get_listeners(name):
            response = listener(*payload)

            if halt and response is not None:
                return response

            if response is False:
                break

            responses.append(response)

        return None if halt else responses

    def forget(self, event: EventSpec) -> None:
        name = event_name(event)
        if "*" in name:
            self._wildcards.pop(name, None)
            self._wildcard_patterns.pop(name, None)
        else:
            self._listeners.pop(name, None)

    @staticmethod
    def _make_wildcard_listener(listener: Listener, name: str) -> Listener:
        def wildcard_listener(*payload: Any) -> Any:
            return listener(name, list(payload))
        return wildcard_listener


class NullDispatcher(DispatcherInterface):
    """Dispatcher that drops every event. Used until a real one is set."""

    def listen(self, events: Union[EventSpec, Sequence[EventSpec]], listener: Listener) -> None:
        pass

    def has_listeners(self, event: EventSpec) -> bool:
        return False

    def has_wildcard_listeners(self, event: EventSpec) -> bool:
        return False

    def get_listeners(self, event: EventSpec) -> List[Listener]:
        return []

    def dispatch(self, event: Any, payload: Optional[List[Any]] = None, halt: bool = False) -> Any:
        return None if halt else []

    def forget(self, event: EventSpec) -> None:
        pass
