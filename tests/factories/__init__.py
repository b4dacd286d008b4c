"""Test factories for creating test data."""

from tests.factories.privacy import (
    FakeClock,
    RequestFactory,
    caregiver_profile,
    parent_profile,
)

__all__ = [
    "FakeClock",
    "RequestFactory",
    "caregiver_profile",
    "parent_profile",
]
