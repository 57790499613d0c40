"""Test configuration and fixtures for the product catalog API."""

from tests.fixtures import *  # noqa: F401,F403
