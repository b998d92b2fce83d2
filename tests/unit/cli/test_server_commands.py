"""Tests for the catalog CLI commands."""

from typer.testing import CliRunner

from src.cli import app
from src.catalog_api.runtime.config.config_data import ConfigData, SecurityConfig
from src.catalog_api.runtime.context import with_context

runner = CliRunner()


class TestCli:
    def test_routes_lists_product_endpoints(self):
        result = runner.invoke(app, ["routes"])
        assert result.exit_code == 0
        assert "/api/products/search" in result.output
        assert "/health" in result.output

    def test_keys_are_masked(self):
        override = ConfigData(security=SecurityConfig(api_keys=["secret-value-1234"]))
        with with_context(override):
            result = runner.invoke(app, ["keys"])
        assert result.exit_code == 0
        assert "1234" in result.output
        assert "secret-value" not in result.output

    def test_no_arguments_shows_help(self):
        result = runner.invoke(app, [])
        assert "serve" in result.output
