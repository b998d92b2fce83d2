"""Test configuration for the catalog API."""

from tests.fixtures import *  # noqa: F401,F403
