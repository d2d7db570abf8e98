"""Five-card poker hand classification with a 7462-class canonical ranking."""

from .engine import Card, Category, HandDescriptor, category_name, classify, is_better
from .lookup import (
    CanonicalTable,
    Evaluation,
    HandEvaluator,
    TableConfig,
    build_canonical_table,
    evaluate_best,
)

__version__ = "0.1.0"

__all__ = [
    "Card",
    "Category",
    "HandDescriptor",
    "category_name",
    "classify",
    "is_better",
    "CanonicalTable",
    "Evaluation",
    "HandEvaluator",
    "TableConfig",
    "build_canonical_table",
    "evaluate_best",
]
