"""Unit tests for the Loguru setup."""

import logging

import pytest
from loguru import logger

from src.catalog_api.api.utils.app_startup import configure_logging, format_record


@pytest.fixture
def captured(test_config):
    configure_logging(test_config)
    messages: list[str] = []
    handler_id = logger.add(messages.append, format=format_record, level="DEBUG")
    yield messages
    logger.remove(handler_id)


class TestFormatRecord:
    def test_plain_record_has_no_optional_context(self, captured):
        logger.info("started")
        line = captured[0]
        assert "[-]" in line
        assert "product=" not in line
        assert " -> " not in line

    def test_product_id_is_appended(self, captured):
        logger.bind(product_id=3).info("product.created")
        assert captured[0].rstrip().endswith("| product=3")

    def test_request_context_is_appended(self, captured):
        with logger.contextualize(request_id="abc", method="GET", path="/health"):
            logger.bind(status_code=200, duration_ms=1.5).info("request.end")
        line = captured[0]
        assert "[abc]" in line
        assert "GET /health -> 200 (1.5 ms)" in line


class TestConfigureLogging:
    def test_stdlib_records_are_forwarded(self, captured):
        logging.getLogger("catalog.tests").warning("from stdlib")
        assert any("from stdlib" in line for line in captured)

    def test_file_sink_is_created(self, test_config, tmp_path):
        log_file = tmp_path / "logs" / "catalog.log"
        config = test_config.model_copy(deep=True)
        config.logging.file = str(log_file)

        configure_logging(config)
        try:
            assert log_file.parent.is_dir()
        finally:
            configure_logging(test_config)
