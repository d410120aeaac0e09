"""
notification-lib: Fluent validation that collects notifications

Domain objects inherit from Notifiable and describe their rules as a
chain. Failing rules append a Notification (field + message) to the
object instead of raising:

- Selector-based rules: the field name comes from the attribute accessed
- Generic comparisons for int, float, Decimal, date and datetime
- Email, URL, GUID and regex format checks
- CPF and CNPJ check digit validation
- Localized message templates (en, pt-BR) from a bundled YAML catalog

Example:
    from notification_lib import Notifiable

    class Customer(Notifiable):
        def __init__(self, name, cpf):
            super().__init__()
            self.name = name
            self.cpf = cpf
            (self.rules()
                .if_null_or_empty(lambda c: c.name)
                .if_not_cpf(lambda c: c.cpf))

    customer = Customer("Ana", "111.444.777-35")
    customer.is_valid  # True
"""

from .accessor import InvalidSelectorError
from .messages import MessageCatalog
from .notifiable import Notifiable, Notification
from .rule_evaluator import RuleEvaluator

__version__ = "0.1.0"
__all__ = [
    "InvalidSelectorError",
    "MessageCatalog",
    "Notifiable",
    "Notification",
    "RuleEvaluator",
]
