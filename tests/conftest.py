"""
Shared fixtures for the data layer tests.

Each test gets a fresh application bound to an in-memory SQLite database
(foreign keys switched on), an active application context and a DataClient.
"""
import pytest

from marketplace import create_app, db
from marketplace.client import DataClient
from marketplace.config import TestConfig


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    data_client = DataClient()
    yield data_client
    data_client.disconnect()


# ============================================================================
# Test Data Factories
# ============================================================================

class UserFactory:
    """Factory for user creation payloads."""

    _counter = 0

    @classmethod
    def create(cls, role='CLIENT', **kwargs) -> dict:
        cls._counter += 1
        defaults = {
            'email': f'user{cls._counter}@example.com',
            'username': f'user{cls._counter}',
            'password': 'securepassword',
            'role': role,
        }
        defaults.update(kwargs)
        return defaults

    @classmethod
    def reset(cls):
        cls._counter = 0


class ProductFactory:
    """Factory for product creation payloads."""

    _counter = 0

    @classmethod
    def create(cls, seller_id, **kwargs) -> dict:
        cls._counter += 1
        defaults = {
            'name': f'Product {cls._counter}',
            'description': f'Description for product {cls._counter}',
            'price': '19.99',
            'stock': 10,
            'seller': {'connect': {'id': seller_id}},
        }
        defaults.update(kwargs)
        return defaults

    @classmethod
    def reset(cls):
        cls._counter = 0


@pytest.fixture(autouse=True)
def reset_factories():
    UserFactory.reset()
    ProductFactory.reset()
    yield


@pytest.fixture
def client_user(client):
    return client.user.create_user(UserFactory.create(
        role='CLIENT', client={'firstname': 'John', 'lastname': 'Doe'}
    ))


@pytest.fixture
def seller_user(client):
    return client.user.create_user(UserFactory.create(
        role='SELLER', seller={'business_name': 'My Business'}
    ))
