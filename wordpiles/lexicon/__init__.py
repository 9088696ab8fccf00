"""Level and dictionary data for word-piles."""

from .models import Difficulty, LevelConfig, PlacementOrder, LetterSortMode, WordStatus
from .errors import GameDataError
from .dictionary import Dictionary, normalize_word
from .levels import load_levels, parse_levels
from .matcher import classify_word

__all__ = [
    # Models
    "Difficulty",
    "LevelConfig",
    "PlacementOrder",
    "LetterSortMode",
    "WordStatus",
    # Loading
    "GameDataError",
    "Dictionary",
    "normalize_word",
    "load_levels",
    "parse_levels",
    # Matching
    "classify_word",
]
