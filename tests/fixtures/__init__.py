"""
Test fixtures package.
"""
from tests.fixtures.contact import FakeTransport

__all__ = ["FakeTransport"]
