import logging
import random
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .models import GameConfig, ScheduledTask, SessionView
from .session import Session
from .view import build_view
from ..lexicon.dictionary import Dictionary
from ..lexicon.models import LevelConfig


logger = logging.getLogger(__name__)

ALL_LEVELS_DONE = "Congratulations! You have completed every level."


class WordPiles(BaseModel):
    """
    Top-level controller for a word-piles game.

    Holds the level list and dictionary, owns the current Session and is
    the single entry point for front-end input.

    Attributes:
        levels: Ordered level configurations
        dictionary: Word list shared by every level
        config: Game configuration
        level_index: Index of the level being played
        session: The current attempt
        notice: One-time message for the next view (set when levels wrap)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    levels: List[LevelConfig] = Field(..., min_length=1)
    dictionary: Dictionary = Field(default_factory=Dictionary)
    config: GameConfig = Field(default_factory=GameConfig)
    level_index: int = 0
    session: Optional[Session] = None
    notice: Optional[str] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(
        cls,
        levels: List[LevelConfig],
        dictionary: Optional[Dictionary] = None,
        config: Optional[GameConfig] = None,
    ) -> "WordPiles":
        """
        Factory method to create a game and load its starting level.

        Args:
            levels: Ordered level list (at least one)
            dictionary: Word list for hidden words
            config: Optional configuration; ``start_level`` picks the first level

        Returns:
            A WordPiles instance with an active session
        """
        config = config or GameConfig()
        game = cls(
            levels=levels,
            dictionary=dictionary if dictionary is not None else Dictionary(),
            config=config,
        )
        game.load_level(min(config.start_level, len(levels) - 1))
        return game

    @property
    def level(self) -> LevelConfig:
        """Configuration of the current level."""
        return self.levels[self.level_index]

    @property
    def is_processing(self) -> bool:
        return self.session is not None and self.session.is_processing

    def load_level(self, index: int) -> bool:
        """
        Start a fresh session on the level at ``index``.

        Returns:
            False if a commit is pending or the index is out of range
        """
        if self.is_processing:
            return False
        if not 0 <= index < len(self.levels):
            logger.debug("Level index %d out of range", index)
            return False

        self.level_index = index
        self.session = Session.create(
            self.levels[index],
            dictionary=self.dictionary,
            config=self.config,
            rng=self._rng,
        )
        return True

    def advance_level(self) -> bool:
        """
        Move to the next level, wrapping to the first after the last one.

        Wrapping sets a one-time congratulation notice.
        """
        if self.is_processing:
            return False

        index = self.level_index + 1
        if index >= len(self.levels):
            index = 0
            self.notice = ALL_LEVELS_DONE
            logger.info("All %d levels completed, wrapping to the first", len(self.levels))

        return self.load_level(index)

    def restart(self) -> bool:
        """Regenerate the current board from the unfound words."""
        return self.session.restart()

    def select(self, tile_id: str) -> bool:
        return self.session.select(tile_id)

    def deselect(self, tile_id: str) -> bool:
        return self.session.deselect(tile_id)

    def confirm_or_reset(self) -> Optional[ScheduledTask]:
        return self.session.confirm_or_reset()

    def hint(self) -> Optional[str]:
        return self.session.hint()

    def reveal_colors_bonus(self) -> bool:
        return self.session.reveal_colors()

    def complete(self, task: ScheduledTask) -> Optional[ScheduledTask]:
        """Report that a scheduled continuation's delay has elapsed."""
        return self.session.complete(task)

    def view(self) -> SessionView:
        """Presentation model for the current state. Consumes the pending notice."""
        notice, self.notice = self.notice, None
        return build_view(self.session, notice=notice)

    def get_state(self) -> Dict:
        """
        Get the current game state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "level_index": self.level_index,
            "num_levels": len(self.levels),
            "dictionary_size": len(self.dictionary),
            "session": self.session.get_state() if self.session else None,
        }
