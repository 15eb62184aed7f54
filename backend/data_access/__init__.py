"""
Data access layer for Snake Arcade database operations.

This module provides functions for reading and writing the persisted
best score.
"""

from .best_score import (
    load_best_score,
    save_best_score,
    clear_best_score,
    BestScoreStore
)

__all__ = [
    'load_best_score',
    'save_best_score',
    'clear_best_score',
    'BestScoreStore',
]
