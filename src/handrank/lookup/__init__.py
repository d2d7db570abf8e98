"""Canonical hand table and best-of-seven evaluation."""

from .config import FastConfig, ReferenceConfig, TableConfig
from .evaluator import (
    SHOWDOWN_SIZE,
    Evaluation,
    HandEvaluator,
    best_descriptor,
    compare_hands,
    evaluate_batch,
    evaluate_best,
    evaluate_hand,
    get_default_evaluator,
)
from .table import EXPECTED_CLASSES, NUM_COMBINATIONS, CanonicalTable, build_canonical_table
from .utils import format_number, format_time
from .vectorized import (
    DECK_RANKS,
    DECK_SUITS,
    classify_batch,
    classify_indices,
    combination_index_array,
    pack_keys,
    unpack_codes,
)

__all__ = [
    # Config
    "TableConfig",
    "FastConfig",
    "ReferenceConfig",
    # Table
    "CanonicalTable",
    "build_canonical_table",
    # Evaluator
    "Evaluation",
    "HandEvaluator",
    "best_descriptor",
    "evaluate_best",
    "evaluate_batch",
    "evaluate_hand",
    "compare_hands",
    "get_default_evaluator",
    # Vectorized
    "classify_batch",
    "classify_indices",
    "combination_index_array",
    "pack_keys",
    "unpack_codes",
    # Utils
    "format_time",
    "format_number",
    # Constants
    "EXPECTED_CLASSES",
    "NUM_COMBINATIONS",
    "SHOWDOWN_SIZE",
    "DECK_RANKS",
    "DECK_SUITS",
]
