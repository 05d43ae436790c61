import logging
from typing import Callable, Generic, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[Sequence[T]], None]


class Publisher(Generic[T]):
    """Pushes the full, freshly fetched list to subscribers after each mutation."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, items: Sequence[T]) -> None:
        for callback in list(self._subscribers):
            try:
                callback(items)
            except Exception as e:
                logger.error(f"Subscriber {callback!r} failed: {e}", exc_info=True)
