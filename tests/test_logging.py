import logging
import uuid

import pytest

from modules.products.dtos import DeleteProductDTO, UpdateProductStockDTO
from modules.products.exceptions import ProductForbidden
from modules.products.repositories import ProductDjangoRepository
from modules.products.services import ProductService


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert result["header"].startswith("token=")

    def test_non_string_values_untouched(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "count": 3}
        assert mask_sensitive_data(None, None, event_dict)["count"] == 3


class TestCatalogLogEvents:
    def test_forbidden_is_logged_as_warning(self, caplog, stranger, make_product):
        product = make_product()
        service = ProductService(repository=ProductDjangoRepository())

        with caplog.at_level(logging.INFO):
            with pytest.raises(ProductForbidden):
                service.delete_product(
                    DeleteProductDTO(user_id=stranger.id, product_id=product.id)
                )

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("product.forbidden" in r.getMessage() for r in warnings)

    def test_stock_update_logs_affected_rows(self, caplog, make_product):
        product = make_product(stock=1)
        service = ProductService(repository=ProductDjangoRepository())

        with caplog.at_level(logging.INFO):
            service.update_product_stock(
                UpdateProductStockDTO(
                    items=[
                        {"product_id": product.id, "stock": 2},
                        {"product_id": uuid.uuid4(), "stock": 2},
                    ]
                )
            )

        messages = [r.getMessage() for r in caplog.records]
        assert any("product.stock_updated" in m and "'affected': 1" in m for m in messages)
