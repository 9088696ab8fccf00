import logging
import random
from typing import Dict, List, Literal, Optional, Set
from pydantic import BaseModel, Field, ConfigDict

from .board import Board
from .generator import generate_columns
from .models import Confirmation, GameConfig, ScheduledTask, TaskKind, Tile
from .availability import topmost_selected
from ..lexicon.dictionary import Dictionary
from ..lexicon.matcher import classify_word
from ..lexicon.models import LevelConfig, WordStatus


logger = logging.getLogger(__name__)

Phase = Literal["IDLE", "BUILDING", "PROCESSING"]


class Session(BaseModel):
    """
    State of one attempt at one level.

    Owns the board, the selection and the found/revealed/hidden word lists,
    and is the only place they change. Commits are two-step: confirming a
    word returns a ScheduledTask and the board is only mutated once the
    host hands that task back through ``complete()``. While a task is
    outstanding ``is_processing`` is set and every input is rejected. After
    the last word the gate stays closed through the win delay.

    Attributes:
        level: The level being played
        dictionary: Valid words for hidden-word discovery
        config: Delays and palette
        target_words: Normalized target words, in hint order
        found_words: Targets already assembled
        revealed_words: Targets shown by a hint but not yet found
        hidden_words: Non-target dictionary words discovered
        selected_tiles: Selected tiles in click order
        board: The column stacks
        is_processing: Gate closed while a commit is pending
        is_colored: Whether word colors are shown
        is_won: Set once the win continuation has run
        confirmed: How the pending commit marks the selected tiles
        level_colors: Palette permutation for this level
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: LevelConfig
    dictionary: Dictionary = Field(default_factory=Dictionary)
    config: GameConfig = Field(default_factory=GameConfig)
    target_words: List[str] = Field(default_factory=list)
    found_words: List[str] = Field(default_factory=list)
    revealed_words: List[str] = Field(default_factory=list)
    hidden_words: List[str] = Field(default_factory=list)
    selected_tiles: List[Tile] = Field(default_factory=list)
    board: Board = Field(default_factory=Board)
    is_processing: bool = False
    is_colored: bool = True
    is_won: bool = False
    confirmed: Optional[Confirmation] = None
    level_colors: List[str] = Field(default_factory=list)
    generation: int = 0
    task_counter: int = 0
    pending_tasks: Dict[str, ScheduledTask] = Field(default_factory=dict)
    _rng: random.Random = None

    @classmethod
    def create(
        cls,
        level: LevelConfig,
        dictionary: Optional[Dictionary] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "Session":
        """
        Factory method to start a fresh attempt at a level.

        Args:
            level: Level configuration
            dictionary: Word list for hidden words (empty if omitted)
            config: Game configuration (defaults if omitted)
            rng: Random source; a new unseeded one if omitted

        Returns:
            A Session with a freshly generated board
        """
        config = config or GameConfig()
        rng = rng or random.Random(config.seed)

        target_words = level.normalized_words
        if not level.difficulty.follow_order:
            rng.shuffle(target_words)

        level_colors = list(config.palette)
        rng.shuffle(level_colors)

        session = cls(
            level=level,
            dictionary=dictionary if dictionary is not None else Dictionary(),
            config=config,
            target_words=target_words,
            is_colored=level.difficulty.colored,
            level_colors=level_colors,
        )
        session._rng = rng
        session._regenerate(target_words)
        logger.info(
            "Level %s: %d words, %d columns, %s placement, %s letters",
            level.id, len(target_words), level.column_count,
            level.difficulty.placement_order, level.difficulty.letter_sort_mode,
        )
        return session

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def selected_ids(self) -> Set[str]:
        """Ids of the selected tiles."""
        return {tile.id for tile in self.selected_tiles}

    @property
    def current_word(self) -> str:
        """Letters of the selection, in click order."""
        return ''.join(tile.char for tile in self.selected_tiles)

    @property
    def remaining_words(self) -> List[str]:
        """Targets not found yet, in target order."""
        return [word for word in self.target_words if word not in self.found_words]

    @property
    def is_complete(self) -> bool:
        """True once every target has been found."""
        return len(self.found_words) == len(self.target_words)

    @property
    def phase(self) -> Phase:
        if self.is_processing:
            return "PROCESSING"
        return "BUILDING" if self.selected_tiles else "IDLE"

    def classify(self) -> WordStatus:
        """Classify the word spelled by the current selection."""
        return classify_word(
            self.current_word,
            self.target_words,
            self.found_words,
            self.hidden_words,
            self.dictionary,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select(self, tile_id: str) -> bool:
        """
        Add an ACTIVE tile to the selection.

        Returns:
            True if the tile was selected, False if the click was rejected
        """
        if self.is_processing or self.is_won:
            logger.debug("Select %s rejected: %s", tile_id, "processing" if self.is_processing else "won")
            return False

        tile = self.board.get_tile(tile_id)
        state = self.board.state_of(tile_id, self.selected_ids)
        if tile is None or state != "ACTIVE":
            logger.debug("Select %s rejected: state %s", tile_id, state)
            return False

        tile.selected = True
        self.selected_tiles.append(tile)
        return True

    def deselect(self, tile_id: str) -> bool:
        """
        Remove a tile from the selection.

        Only the topmost selected tile of a column can be taken back.

        Returns:
            True if the tile was deselected, False if the click was rejected
        """
        if self.is_processing:
            logger.debug("Deselect %s rejected: processing", tile_id)
            return False

        position = self.board.locate(tile_id)
        if position is None:
            return False

        column = self.board.columns[position[0]]
        top = topmost_selected(column, self.selected_ids)
        if top is None or top.id != tile_id:
            logger.debug("Deselect %s rejected: not the topmost selected tile", tile_id)
            return False

        top.selected = False
        self.selected_tiles = [tile for tile in self.selected_tiles if tile.id != tile_id]
        return True

    def clear_selection(self) -> bool:
        """Drop the whole selection (the reset half of confirm-or-reset)."""
        if self.is_processing:
            return False
        self._clear_selection()
        return True

    def confirm_or_reset(self) -> Optional[ScheduledTask]:
        """
        Act on the assembled word.

        - TARGET_UNFOUND: commit as found; tiles are removed on completion
        - IN_DICTIONARY:  commit as hidden; tiles stay on the board
        - INVALID:        clear the selection
        - EMPTY / ALREADY_FOUND, or while processing: nothing happens

        Returns:
            The continuation the host must schedule, or None
        """
        if self.is_processing:
            return None

        word = self.current_word
        status = self.classify()

        if status == "TARGET_UNFOUND":
            self.is_processing = True
            self.confirmed = "found"
            self.found_words.append(word)
            if word in self.revealed_words:
                self.revealed_words.remove(word)
            logger.info("Found %s (%d/%d)", word, len(self.found_words), len(self.target_words))
            return self._schedule(
                "remove_tiles",
                self.config.found_delay_ms,
                [tile.id for tile in self.selected_tiles],
            )

        if status == "IN_DICTIONARY":
            self.is_processing = True
            self.confirmed = "hidden"
            self.hidden_words.append(word)
            logger.info("Hidden word %s", word)
            return self._schedule("clear_selection", self.config.hidden_delay_ms)

        if status == "INVALID":
            self._clear_selection()

        return None

    def complete(self, task: ScheduledTask) -> Optional[ScheduledTask]:
        """
        Run a scheduled continuation once its delay has elapsed.

        Returns:
            A follow-up task (the win screen after the last word), or None

        Raises:
            ValueError: If the task is unknown or was already completed
        """
        if self.pending_tasks.pop(task.task_id, None) is None:
            raise ValueError(f"Unknown or already completed task: {task.task_id}")

        if task.kind == "remove_tiles":
            removed = self.board.remove_tiles(task.tile_ids)
            logger.debug("Removed %d tiles", removed)
            self._clear_selection()
            if self.is_complete:
                return self._schedule("win", self.config.win_delay_ms)
            self.is_processing = False

        elif task.kind == "clear_selection":
            self._clear_selection()
            self.is_processing = False

        elif task.kind == "win":
            self.is_won = True
            self.is_processing = False
            logger.info("Level %s complete", self.level.id)

        return None

    def hint(self) -> Optional[str]:
        """
        Reveal the first target that is neither found nor revealed.

        Returns:
            The revealed word, or None if nothing is left to reveal
        """
        if self.is_processing:
            return None

        for word in self.target_words:
            if word not in self.found_words and word not in self.revealed_words:
                self.revealed_words.append(word)
                return word
        return None

    def reveal_colors(self) -> bool:
        """Switch word colors on for a level that started uncolored. One-shot."""
        if self.is_processing or self.is_colored:
            return False
        self.is_colored = True
        return True

    def restart(self) -> bool:
        """
        Regenerate the board from the targets not found yet.

        Found, revealed and hidden words are kept.

        Returns:
            True if the board was regenerated
        """
        if self.is_processing:
            return False

        remaining = self.remaining_words
        if not remaining:
            return False

        self._clear_selection()
        self._regenerate(remaining)
        logger.info("Restarted level %s with %d words", self.level.id, len(remaining))
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _regenerate(self, words: List[str]) -> None:
        self.generation += 1
        columns = generate_columns(
            self.level,
            words,
            self.target_words,
            self._rng,
            id_prefix=f"g{self.generation}",
        )
        self.board = Board(columns=columns, row_count=self.level.row_count)

    def _clear_selection(self) -> None:
        for tile in self.selected_tiles:
            tile.selected = False
        self.selected_tiles = []
        self.confirmed = None

    def _schedule(self, kind: TaskKind, delay_ms: int, tile_ids: Optional[List[str]] = None) -> ScheduledTask:
        self.task_counter += 1
        task = ScheduledTask(
            task_id=f"task-{self.task_counter}",
            kind=kind,
            delay_ms=delay_ms,
            tile_ids=tile_ids or [],
        )
        self.pending_tasks[task.task_id] = task
        return task

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "level_id": self.level.id,
            "phase": self.phase,
            "target_words": list(self.target_words),
            "found_words": list(self.found_words),
            "revealed_words": list(self.revealed_words),
            "hidden_words": list(self.hidden_words),
            "current_word": self.current_word,
            "is_colored": self.is_colored,
            "is_won": self.is_won,
            "board": self.board.get_state(),
        }
