from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List

from jamii.core.logger import logger

@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"  # default, destructive, warning
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """User-visible notices, kept in order of emission."""

    def __init__(self):
        self.history: List[Notification] = []
        self._listeners: List[Callable[[Notification], None]] = []

    def notify(self, title: str, description: str, variant: str = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)

        if variant == "default":
            logger.info(f"Notice: {title} | {description}")
        else:
            logger.warning(f"Notice ({variant}): {title} | {description}")

        for listener in list(self._listeners):
            listener(notification)
        return notification

    def subscribe(self, listener: Callable[[Notification], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def count(self, title: str) -> int:
        return sum(1 for n in self.history if n.title == title)

    def clear(self):
        self.history.clear()
