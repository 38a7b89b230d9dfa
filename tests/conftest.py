# tests/conftest.py

import pytest

from targetplanner.models import ProductInput


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    WTF_CSRF_ENABLED = False
    PRODUCT_VALUE_TOLERANCE = 0.0
    DEFAULT_PRODUCT_COUNT = 3
    SESSION_IDLE_TIMEOUT = 7200
    CURRENCY_SYMBOL = '₹'
    WKHTMLTOPDF_PATH = None


@pytest.fixture
def app():
    """A fresh app per test, so every test starts with an empty session store."""
    from targetplanner import create_app

    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_product():
    """Builds a fully populated ProductInput; override any field by keyword."""
    def _make(id=1, name='Product A', product_value=100.0, sales_ratio=35.0,
              price=1000.0, conversion_ratio=10.0):
        return ProductInput(id=id, name=name, product_value=product_value, sales_ratio=sales_ratio,
                            price=price, conversion_ratio=conversion_ratio)
    return _make
