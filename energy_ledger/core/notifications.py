"""
Reminder delivery.

Reminders are only composed by the ledger; handing them to a mail system is
the job of a Notifier. The default notifier just logs the hand-off.
"""

from dataclasses import dataclass
from typing import Protocol

from energy_ledger.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Reminder:
    """A composed overdue-payment reminder addressed to one customer."""
    customer_id: int
    customer_name: str
    email: str
    text: str


class Notifier(Protocol):
    def send(self, reminder: Reminder) -> None:
        ...


class LoggingNotifier:
    """Notifier that records each reminder in the log instead of mailing it."""

    def send(self, reminder: Reminder) -> None:
        logger.info(
            "Sent reminder to %s (ID: %s)",
            reminder.customer_name,
            reminder.customer_id,
            extra={"customer_id": reminder.customer_id, "email": reminder.email},
        )


class CollectingNotifier:
    """Notifier that keeps reminders in memory, for previews and tests."""

    def __init__(self):
        self.sent = []

    def send(self, reminder: Reminder) -> None:
        self.sent.append(reminder)
