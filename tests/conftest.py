"""Shared fixtures."""

import pytest

from handrank.lookup import CanonicalTable, HandEvaluator, build_canonical_table


@pytest.fixture(scope="session")
def table() -> CanonicalTable:
    """Canonical table, built once per test session."""
    return build_canonical_table()


@pytest.fixture(scope="session")
def evaluator(table: CanonicalTable) -> HandEvaluator:
    return HandEvaluator(table=table)
