from unittest.mock import MagicMock

import pytest

from mailer import Notifier
from settings import Settings
from webapp import create_app


@pytest.fixture
def orders_file(tmp_path):
    return tmp_path / "orders.txt"


@pytest.fixture
def notifier():
    return MagicMock(spec=Notifier)


@pytest.fixture
def app(orders_file, notifier):
    settings = Settings(orders_file=str(orders_file))
    return create_app(settings, notifier=notifier)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ada():
    return {
        "name": "Ada",
        "address": "12 Lane",
        "phone": "555-1",
        "product": "catfish",
        "quantity": 1,
        "notes": "",
    }
