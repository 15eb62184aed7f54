"""
Best score persistence functions.

These functions delegate to the ScoreRepository for actual database operations.
"""

import re
import logging

from domain.constants import BEST_SCORE_KEY
from .repositories import ScoreRepository

logger = logging.getLogger(__name__)

# Repository instance
_score_repo = ScoreRepository()

_DIGITS = re.compile(r"[0-9]+")


def load_best_score(key: str = BEST_SCORE_KEY) -> int:
    """
    Read the persisted best score.

    Anything but a plain run of ASCII digits counts as 0.

    Args:
        key: Storage key (default 'snakeBestScore')

    Returns:
        The best score as a non-negative int
    """
    raw = _score_repo.get_value(key)
    if raw is None:
        return 0
    if not isinstance(raw, str) or not _DIGITS.fullmatch(raw):
        logger.warning(f"Ignoring corrupt best score {raw!r} stored under {key}")
        return 0
    return int(raw)


def save_best_score(score: int, key: str = BEST_SCORE_KEY) -> None:
    """
    Persist score as the best score.

    Args:
        score: Non-negative best score
        key: Storage key (default 'snakeBestScore')
    """
    if score < 0:
        raise ValueError(f"Best score cannot be negative: {score}")
    _score_repo.set_value(key, str(score))


def clear_best_score(key: str = BEST_SCORE_KEY) -> bool:
    """
    Remove the persisted best score.

    Returns:
        True if a stored value was removed
    """
    return _score_repo.delete_value(key)


class BestScoreStore:
    """
    Adapter handed to GameLoop: load() once at startup, save() on a new best.
    """

    def __init__(self, key: str = BEST_SCORE_KEY):
        self.key = key

    def load(self) -> int:
        return load_best_score(self.key)

    def save(self, score: int) -> None:
        save_best_score(score, self.key)
