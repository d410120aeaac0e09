"""Shared fixtures for notification-lib tests."""
from datetime import date
from decimal import Decimal

import pytest

from notification_lib import Notifiable
from notification_lib.config_loader import reset_config
from notification_lib.messages import reset_catalog


class Customer(Notifiable):
    """Sample notifiable with one attribute of each kind the rules handle."""

    def __init__(self, **fields):
        super().__init__()
        self.name = "Ana Souza"
        self.email = "ana.souza@example.com"
        self.website = "https://www.example.com"
        self.cpf = "111.444.777-35"
        self.cnpj = "11.444.777/0001-61"
        self.external_id = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"
        self.age = 30
        self.score = 7.5
        self.credit_limit = Decimal("1500.00")
        self.birth_date = date(1994, 5, 17)
        self.active = True
        self.blocked = False
        self.orders = [1, 2, 3]
        self.referrer_id = None
        for key, value in fields.items():
            setattr(self, key, value)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Each test starts with freshly loaded bundled configuration."""
    reset_config()
    reset_catalog()
    yield
    reset_config()
    reset_catalog()


@pytest.fixture
def customer():
    """Customer that passes every rule used in the tests."""
    return Customer()


@pytest.fixture
def make_customer():
    """Factory for customers with overridden attributes."""
    return Customer
