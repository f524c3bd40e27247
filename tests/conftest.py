from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from modules.products.models import Product, ProductCategory
from modules.shops.models import Shop

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def owner():
    return User.objects.create_user(username="shop_owner", password="testpass123")


@pytest.fixture()
def stranger():
    return User.objects.create_user(username="stranger", password="testpass123")


@pytest.fixture()
def shop(owner):
    return Shop.objects.create(user=owner, name="Owner Shop")


@pytest.fixture()
def category():
    return ProductCategory.objects.create(name="Gadgets")


@pytest.fixture()
def make_product(shop, category):
    """Factory persisting a product in ``shop`` / ``category`` by default."""

    def _make(**overrides) -> Product:
        defaults = {
            "shop": shop,
            "category": category,
            "name": "Widget",
            "description": "A widget",
            "image_url": "https://img.example.com/widget.png",
            "price": Decimal("19.99"),
            "stock": 10,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
