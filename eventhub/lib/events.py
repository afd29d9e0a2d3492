"""Minimal event system that can be mixed into any object."""

from __future__ import annotations

import logging
import types
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from eventhub.config import get_config

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class _NoContext:
    """Marker for subscriptions registered without a context."""

    def __repr__(self) -> str:
        return "NO_CONTEXT"


NO_CONTEXT = _NoContext()


@dataclass
class EventData:
    """Payload passed to handlers when an event is emitted by name."""

    type: str
    params: list = field(default_factory=list)
    data: Any = None


@dataclass
class HandlerSettings:
    once: bool = False


@dataclass(eq=False)
class Subscription:
    handler: Handler
    context: Any = NO_CONTEXT
    once: bool = False
    spent: bool = field(default=False, init=False, repr=False)

    def matches(self, handler: Handler, context: Any) -> bool:
        return self.context is context and _same_handler(self.handler, handler)

    def __call__(self, event: Any) -> None:
        if self.context is NO_CONTEXT:
            self.handler(event)
        else:
            self.handler(self.context, event)


def _same_handler(a: Handler, b: Handler) -> bool:
    if a is b:
        return True
    # obj.method builds a new bound method on every access; method equality
    # compares __self__ by identity
    if getattr(a, "__self__", None) is None:
        return False
    return a == b


def _normalize_context(context: Any) -> Any:
    return NO_CONTEXT if context is None else context


def _is_once(settings: HandlerSettings | Mapping | None) -> bool:
    if settings is None:
        return False
    if isinstance(settings, Mapping):
        return bool(settings.get("once"))
    return bool(settings.once)


def _event_type(event: Any) -> str | None:
    if event is None or isinstance(event, str):
        return event
    if isinstance(event, Mapping):
        return event.get("type")
    return getattr(event, "type", None)


class EventHub:
    """Registry of event handlers with synchronous, ordered dispatch.

    Handlers are called synchronously in registration order; exceptions
    bubble up normally. Registering the same (handler, context) pair twice
    for a type is a no-op.

    Mutators return ``owner`` so calls can be chained on the object the hub
    is embedded in. A hub created without an owner returns itself.
    """

    def __init__(self, owner: object | None = None) -> None:
        self._owner = self if owner is None else owner
        self._registry: dict[str, list[Subscription]] | None = None
        # Bumped on every registry change so dispatch knows when to rescan
        self._version = 0

    def _find(self, type: str, handler: Handler, context: Any) -> int:
        subscriptions = self._registry.get(type) if self._registry else None
        if subscriptions:
            for i in range(len(subscriptions) - 1, -1, -1):
                if subscriptions[i].matches(handler, context):
                    return i
        return -1

    def has_handler(
        self, type: str | None = None, handler: Handler | None = None, context: Any = None
    ) -> bool:
        """Check whether a specific handler, or any handler, is registered.

        Args:
            type: Event type to check. When omitted, any type counts.
            handler: Handler to look for. When omitted, any handler for ``type`` counts.
            context: Context the handler was registered with.

        Returns:
            bool: True if a matching registration exists.
        """
        if not self._registry:
            return False
        if type is None:
            return any(self._registry.values())
        if handler is not None:
            return self._find(type, handler, _normalize_context(context)) > -1
        return bool(self._registry.get(type))

    def on(
        self,
        type: str | Iterable[str],
        handler: Handler,
        context: Any = None,
        settings: HandlerSettings | Mapping | None = None,
    ) -> Any:
        """Register a handler for one event type or a list of types.

        Args:
            type: Event type or iterable of event types to listen for.
            handler: Callable invoked with the event. When ``context`` is given
                it is invoked as ``handler(context, event)``.
            context: Receiver passed as the handler's first argument. Pass a plain
                function such as ``Class.method`` with it; a bound ``obj.method``
                already carries its receiver and would get ``obj`` twice.
            settings: ``HandlerSettings`` or a mapping; ``once=True`` removes the
                handler after the first emit that calls it.

        Returns:
            The owning object.
        """
        if self._registry is None:
            self._registry = {}
        context = _normalize_context(context)
        once = _is_once(settings)
        type_list = [type] if isinstance(type, str) else type
        for event_type in type_list:
            if self._find(event_type, handler, context) > -1:
                continue
            self._registry.setdefault(event_type, []).append(
                Subscription(handler=handler, context=context, once=once)
            )
            self._version += 1
            logger.debug(f"Registered handler {handler!r} for event << {event_type} >>")
        return self._owner

    def off(
        self, type: str | None = None, handler: Handler | None = None, context: Any = None
    ) -> Any:
        """Remove a handler, all handlers for a type, or every handler.

        Returns:
            The owning object.
        """
        if self._registry is None:
            return self._owner
        if type is None:
            self._registry = None
            self._version += 1
            logger.debug("Removed all event handlers")
            return self._owner
        subscriptions = self._registry.get(type)
        if not subscriptions:
            return self._owner
        if handler is None:
            subscriptions.clear()
            self._version += 1
            logger.debug(f"Removed all handlers for event << {type} >>")
            return self._owner
        context = _normalize_context(context)
        # Walk backwards so deleting doesn't shift entries still to visit
        for i in range(len(subscriptions) - 1, -1, -1):
            if subscriptions[i].matches(handler, context):
                del subscriptions[i]
                self._version += 1
        return self._owner

    def emit(self, event: Any = None, *params: Any) -> Any:
        """Call all handlers registered for the event type.

        If ``event`` is a string, an ``EventData`` built from it and ``params``
        is passed to every handler. Any other object is passed as is and its
        type is read from its ``type`` key or attribute; ``params`` are ignored.

        Returns:
            The owning object.
        """
        event_type = _event_type(event)
        if event_type is None or not self._registry:
            return self._owner
        subscriptions = self._registry.get(event_type)
        if not subscriptions:
            return self._owner

        if isinstance(event, str):
            event = EventData(
                type=event_type, params=list(params), data=params[0] if params else None
            )

        trace = get_config().TRACE_DISPATCH
        fired_once: list[Subscription] = []
        live: set[int] = set()
        seen_version = None
        try:
            for subscription in list(subscriptions):
                # An earlier handler may have called on() or off()
                if seen_version != self._version:
                    live = self._live_ids(event_type)
                    seen_version = self._version
                if id(subscription) not in live:
                    continue
                if trace:
                    logger.debug(
                        f"Dispatching << {event_type} >> to {subscription.handler!r}"
                    )
                if not subscription.once:
                    subscription(event)
                    continue
                # A nested emit from inside the handler must not call it again
                if subscription.spent:
                    continue
                subscription.spent = True
                try:
                    subscription(event)
                except BaseException:
                    subscription.spent = False
                    raise
                fired_once.append(subscription)
        finally:
            if fired_once:
                self._drop(event_type, fired_once)
        return self._owner

    def _live_ids(self, type: str) -> set[int]:
        subscriptions = self._registry.get(type) if self._registry else None
        return {id(s) for s in subscriptions} if subscriptions else set()

    def _drop(self, type: str, fired: list[Subscription]) -> None:
        # off() with no arguments may have replaced the registry mid-pass
        subscriptions = self._registry.get(type) if self._registry else None
        if not subscriptions:
            return
        fired_ids = {id(s) for s in fired}
        positions = [i for i, s in enumerate(subscriptions) if id(s) in fired_ids]
        for i in reversed(positions):
            del subscriptions[i]
        self._version += 1


def _hub_of(obj: object, create: bool = False) -> EventHub | None:
    field_name = get_config().HUB_FIELD
    hub = getattr(obj, field_name, None)
    # A hub reached through the class belongs to some other object
    if hub is not None and getattr(hub, "_owner", None) is not obj:
        hub = None
    if hub is None and create:
        hub = EventHub(owner=obj)
        setattr(obj, field_name, hub)
    return hub


def has_handler(self, type=None, handler=None, context=None) -> bool:
    hub = _hub_of(self)
    return hub is not None and hub.has_handler(type, handler, context)


def on(self, type, handler, context=None, settings=None):
    return _hub_of(self, create=True).on(type, handler, context, settings)


def off(self, type=None, handler=None, context=None):
    hub = _hub_of(self)
    if hub is not None:
        hub.off(type, handler, context)
    return self


def emit(self, event=None, *params):
    hub = _hub_of(self)
    if hub is not None:
        hub.emit(event, *params)
    return self


def _can_hold_hub(cls: type) -> bool:
    if cls.__dictoffset__:
        return True
    return isinstance(getattr(cls, get_config().HUB_FIELD, None), types.MemberDescriptorType)


_API = {
    "has_handler": has_handler,
    "on": on,
    "off": off,
    "emit": emit,
}


def get_emitter(target: Any = None) -> Any:
    """Create an event emitter or add event methods to an object.

    Methods installed on a class are shared by its instances, but every
    instance keeps its own handler registry.

    Args:
        target: Object or class to enhance. A new ``SimpleNamespace`` is used
            when omitted.

    Returns:
        ``target``, or the new emitter.

    Raises:
        TypeError: If ``target`` is a class whose instances have no ``__dict__``
            and no slot for the handler registry.
    """
    if target is None:
        target = types.SimpleNamespace()
    is_class = isinstance(target, type)
    if is_class and not _can_hold_hub(target):
        raise TypeError(
            f"{target.__name__} instances have neither __dict__ nor a "
            f"{get_config().HUB_FIELD} slot to keep their event handlers in"
        )
    for name in get_config().METHOD_NAMES:
        func = _API[name]
        setattr(target, name, func if is_class else types.MethodType(func, target))
    return target
