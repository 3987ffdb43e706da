"""
Event Bus System

Provides publish/subscribe pattern for timeline domain events.
Allows UI and other collaborators to react to timeline state changes.

Handlers run synchronously on the publishing thread, after the mutation
that raised the event has completed. The bus holds no locks: a host that
drives one timeline from several threads must serialize its calls.
"""
from typing import Dict, List, Callable, Union, Type

from tweenline.application.events.events import DomainEvent
from tweenline.utils.message import Log

ALL_EVENTS = "*"


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Usage:
        bus = EventBus()
        bus.subscribe("keyframe.added", handle_keyframe_added)
        # Or with class:
        bus.subscribe(KeyframeAdded, handle_keyframe_added)
        # Or every event:
        bus.subscribe(ALL_EVENTS, refresh_view)
        bus.publish(KeyframeAdded(data={...}))
    """

    def __init__(self):
        """Initialize event bus"""
        self._subscribers: Dict[str, List[Callable[[DomainEvent], None]]] = {}
        Log.debug("EventBus: Initialized")

    def _normalize_event_name(self, event_name_or_class: Union[str, Type[DomainEvent]]) -> str:
        """Convert event class or string to normalized string name."""
        if isinstance(event_name_or_class, str):
            return event_name_or_class
        elif hasattr(event_name_or_class, 'name'):
            return event_name_or_class.name
        elif hasattr(event_name_or_class, '__name__'):
            return event_name_or_class.__name__
        else:
            return str(event_name_or_class)

    def subscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Callable[[DomainEvent], None]) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_name: Name of the event type (e.g., "object.added"), event class,
                or ALL_EVENTS
            handler: Function to call when event is published
                Must accept DomainEvent as parameter
        """
        event_name = self._normalize_event_name(event_name)
        handlers = self._subscribers.setdefault(event_name, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Callable[[DomainEvent], None]) -> None:
        """
        Unsubscribe from events of a specific type.

        Args:
            event_name: Name of the event type or event class
            handler: Handler function to remove
        """
        event_name = self._normalize_event_name(event_name)
        handlers = self._subscribers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._subscribers[event_name]

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        A failing handler is logged and skipped so one faulty observer cannot
        stop the others or leave the timeline half-notified.

        Args:
            event: DomainEvent instance to publish
        """
        event_name = event.name if hasattr(event, 'name') else type(event).__name__

        # Copy so handlers may (un)subscribe while being called
        handlers = list(self._subscribers.get(event_name, []))
        if event_name != ALL_EVENTS:
            handlers.extend(h for h in self._subscribers.get(ALL_EVENTS, []) if h not in handlers)

        if not handlers:
            return

        Log.debug(f"EventBus: Publishing '{event_name}' to {len(handlers)} subscribers")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                Log.error(f"EventBus: Error in handler for '{event_name}': {e}")

    def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple events in order.

        Args:
            events: List of DomainEvent instances
        """
        for event in events:
            self.publish(event)

    def get_subscriber_count(self, event_name: Union[str, Type[DomainEvent]]) -> int:
        """
        Get number of subscribers for an event type.

        Args:
            event_name: Name of the event type or event class

        Returns:
            Number of subscribers
        """
        return len(self._subscribers.get(self._normalize_event_name(event_name), []))

    def clear(self) -> None:
        """Clear all subscribers"""
        self._subscribers.clear()
        Log.debug("EventBus: Cleared all subscribers")
