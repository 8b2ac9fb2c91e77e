# backend/core/events.py

"""
In-process domain events.

Services emit events after a state change; handlers run synchronously on the
caller's database session so their writes join the caller's transaction. A
failing handler propagates its exception, which rolls the whole unit of work
back.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List
import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

EventHandler = Callable[[Session, "DomainEvent"], None]


@dataclass
class DomainEvent:
    """Base domain event"""

    event_type: str = field(init=False, default="domain.event")
    occurred_at: datetime = field(init=False, default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in self.__dict__.items() if k != "occurred_at"}
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


_event_handlers: Dict[str, List[EventHandler]] = {}


def register_event_handler(event_type: str, handler: EventHandler):
    """Register a handler; registering the same handler twice is a no-op"""
    handlers = _event_handlers.setdefault(event_type, [])
    if handler in handlers:
        return
    handlers.append(handler)
    logger.info(f"Registered handler {handler.__name__} for {event_type}")


def get_event_handlers(event_type: str) -> List[EventHandler]:
    return list(_event_handlers.get(event_type, []))


def clear_event_handlers():
    _event_handlers.clear()


def emit_event(db: Session, event: DomainEvent) -> int:
    """
    Dispatch an event to its handlers in registration order.

    Returns:
        Number of handlers invoked
    """
    handlers = get_event_handlers(event.event_type)
    if not handlers:
        logger.debug(f"No handlers registered for {event.event_type}")
        return 0

    logger.info(f"Emitting {event.event_type}: {event.to_dict()}")
    for handler in handlers:
        handler(db, event)
    return len(handlers)
