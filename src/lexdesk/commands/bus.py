"""
In-process publish/subscribe command bus.

A command is a flat string name plus a payload dictionary. Handlers subscribe
to a name and are invoked synchronously, in subscription order, each time the
command is dispatched. Handlers never return anything to the dispatcher.

A handler that raises is logged and does not prevent the remaining handlers
of the same dispatch from running.

Example:
    bus = get_command_bus()
    bus.subscribe("view-legal-text", lambda payload: print(payload["title"]))
    bus.dispatch("view-legal-text", {"textId": "t1", "title": "Loi X"})
"""

from typing import Any, Callable, Mapping, Optional

from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

Handler = Callable[[dict], None]


class Subscription:
    """
    Handle to one registered handler.

    Cancelling is idempotent. A one-shot subscription cancels itself right
    before its first invocation.
    """

    def __init__(self, bus: 'CommandBus', command: str, handler: Handler, once: bool = False):
        self._bus = bus
        self.command = command
        self.handler = handler
        self.once = once
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Remove the handler from the bus."""
        if not self._active:
            return
        self._active = False
        self._bus._remove(self)

    def __repr__(self) -> str:
        kind = "once" if self.once else "every"
        return f"<Subscription {self.command} ({kind}, {'active' if self._active else 'cancelled'})>"


class SubscriptionGroup:
    """A set of subscriptions registered together and cancelled together."""

    def __init__(self):
        self._subscriptions: list[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def cancel_all(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()

    def __len__(self) -> int:
        return len(self._subscriptions)


class CommandBus:
    """
    Registry mapping command names to ordered handler lists.

    Dispatch is synchronous and unbounded: there is no priority, no
    cancellation of a dispatch in progress and no queueing. A dispatch
    started from inside a handler runs to completion before the outer
    dispatch continues with its next handler.
    """

    def __init__(self):
        self._subscriptions: dict[str, list[Subscription]] = {}

    def subscribe(self, command: str, handler: Handler) -> Subscription:
        """
        Register a handler for every dispatch of a command.

        Args:
            command: Command name.
            handler: Callable receiving the payload dictionary.

        Returns:
            Subscription that can be cancelled.
        """
        return self._add(Subscription(self, command, handler))

    def subscribe_once(self, command: str, handler: Handler) -> Subscription:
        """
        Register a handler for the next dispatch of a command only.

        The returned subscription may also be cancelled before it fires,
        e.g. when the dialog that created it is dismissed.
        """
        return self._add(Subscription(self, command, handler, once=True))

    def _add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.setdefault(subscription.command, []).append(subscription)
        logger.debug(f"Subscribed {subscription!r}")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.command, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)
        if not subscriptions:
            self._subscriptions.pop(subscription.command, None)

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()

    def dispatch(self, command: str, payload: Optional[Mapping[str, Any]] = None) -> None:
        """
        Invoke every handler currently subscribed to a command.

        Handlers subscribed while the dispatch is running are not invoked by
        it; handlers cancelled by an earlier handler of the same dispatch are
        skipped.

        Args:
            command: Command name.
            payload: Structured payload; each handler receives its own copy.

        Raises:
            TypeError: If payload is not a mapping.
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise TypeError(f"Payload of '{command}' must be a mapping, got {type(payload).__name__}")

        subscriptions = list(self._subscriptions.get(command, []))
        if not subscriptions:
            logger.debug(f"No handler for command '{command}'")
            return

        logger.debug(f"Dispatching '{command}' to {len(subscriptions)} handler(s)")
        for subscription in subscriptions:
            if not subscription.active:
                continue
            if subscription.once:
                subscription.cancel()
            try:
                subscription.handler(dict(payload))
            except Exception as e:
                logger.error(f"Handler for '{command}' failed: {e}", exc_info=True)

    def subscriber_count(self, command: str) -> int:
        """Get the number of handlers currently subscribed to a command."""
        return len(self._subscriptions.get(command, []))

    def commands(self) -> list[str]:
        """Get the names of all commands that have at least one handler."""
        return sorted(self._subscriptions)


# Global bus instance
_command_bus: Optional[CommandBus] = None


def get_command_bus() -> CommandBus:
    """
    Get the process-wide command bus, creating it on first use.

    The bus lives for the whole process; components should receive it as a
    constructor argument rather than calling this function themselves.

    Returns:
        The global CommandBus.
    """
    global _command_bus
    if _command_bus is None:
        _command_bus = CommandBus()
        logger.info("Command bus initialised")
    return _command_bus
