"""Shared test fixtures for seqfilter.

Provides the small sample sequences and pure functions most test modules
exercise, plus a fixture that relaxes the in-place type policy.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from seqfilter.config.settings import get_settings


def _is_even(value: Any) -> bool:
    return value % 2 == 0


def _double(value: Any) -> Any:
    return value * 2


@pytest.fixture()
def is_even() -> Callable[[Any], bool]:
    return _is_even


@pytest.fixture()
def double() -> Callable[[Any], Any]:
    return _double


@pytest.fixture()
def numbers() -> list[int]:
    return [1, 2, 3, 4, 5]


@pytest.fixture()
def permissive(monkeypatch: pytest.MonkeyPatch):
    """Switch in-place type mismatches to the allocating fallback."""
    monkeypatch.setattr(get_settings(), "strict_in_place", False)
    yield get_settings()
