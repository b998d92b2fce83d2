"""Shared pytest fixtures for the catalog API tests."""

from .catalog import *  # noqa: F401,F403
