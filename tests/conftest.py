"""Shared pytest fixtures for the calculator tests."""

from typing import Callable

import pytest

from lm32_calc.models import ExamRecord


@pytest.fixture
def make_exam() -> Callable[..., ExamRecord]:
    """Return a factory for graded exam records."""

    def _make(
        grade: int = 24,
        credits: int = 6,
        with_honors: bool = False,
        name: str = "Exam",
    ) -> ExamRecord:
        return ExamRecord(name=name, credits=credits, grade=grade, with_honors=with_honors)

    return _make


@pytest.fixture
def make_recognition() -> Callable[..., ExamRecord]:
    """Return a factory for recognised (ungraded) exam records."""

    def _make(credits: int = 6, name: str = "Recognised") -> ExamRecord:
        return ExamRecord(name=name, credits=credits, is_recognition=True)

    return _make
