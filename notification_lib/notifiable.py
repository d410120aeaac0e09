"""
Notification value object and the Notifiable base class.

Domain objects inherit from Notifiable to collect validation failures
instead of raising on the first one:

    class Customer(Notifiable):
        def __init__(self, name, email):
            super().__init__()
            self.name = name
            self.email = email

            (self.rules()
                .if_null_or_empty(lambda c: c.name)
                .if_not_email(lambda c: c.email))

    customer = Customer("", "nope")
    customer.is_valid            # False
    customer.get_notifications() # two Notification objects

The notification list is not synchronized. Callers validating the same
object from several threads must serialize access themselves.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Tuple, Union

from .rule_evaluator import RuleEvaluator


@dataclass(frozen=True)
class Notification:
    """A recorded validation failure for one field."""
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class Notifiable:
    """Base class for objects that collect notifications."""

    def __init__(self):
        self._notifications: List[Notification] = []

    def add_notification(self, field: str, message: str) -> None:
        """Append a notification for field."""
        self._notifications.append(Notification(field, message))

    def add_notifications(
        self, source: Union["Notifiable", Iterable[Notification]]
    ) -> None:
        """
        Append notifications from another notifiable or an iterable.

        Useful for aggregates that validate their children:

            order.add_notifications(order.customer)
        """
        if isinstance(source, Notifiable):
            source = source.notifications
        for notification in source:
            if not isinstance(notification, Notification):
                raise TypeError(
                    f"Expected Notification, got {type(notification).__name__}"
                )
            self._notifications.append(notification)

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        return tuple(self._notifications)

    def get_notifications(self) -> List[Notification]:
        """Return a copy of the accumulated notifications."""
        return list(self._notifications)

    @property
    def is_valid(self) -> bool:
        """True if no notification has been recorded."""
        return not self._notifications

    def clear_notifications(self) -> None:
        self._notifications.clear()

    def rules(self, **kwargs) -> RuleEvaluator:
        """
        Return a RuleEvaluator bound to this object.

        Keyword arguments are passed to RuleEvaluator.
        """
        return RuleEvaluator(self, **kwargs)
