"""Pure mapping from a Session to the render-ready SessionView."""

from typing import List, Optional

from .availability import tile_state
from .models import SessionView, TileView, WordView
from .session import Session


def word_color(session: Session, word_index: int) -> Optional[str]:
    """Palette color for a target word, or None while the level is uncolored."""
    if not session.is_colored or not session.level_colors:
        return None
    return session.level_colors[word_index % len(session.level_colors)]


def mask_word(word: str) -> str:
    return '*' * len(word)


def build_view(session: Session, notice: Optional[str] = None) -> SessionView:
    """
    Build the presentation model for the current state.

    While a commit is pending, unselected tiles are reported BLOCKED and
    selected tiles carry the commit's confirmation marker.
    """
    selected_ids = session.selected_ids

    columns: List[List[TileView]] = []
    for column in session.board.columns:
        views: List[TileView] = []
        for index, tile in enumerate(column):
            state = tile_state(tile, column, index, selected_ids)
            if session.is_processing and state != "SELECTED":
                state = "BLOCKED"
            views.append(TileView(
                id=tile.id,
                char=tile.char,
                state=state,
                color=word_color(session, tile.word_index),
                confirmed=session.confirmed if state == "SELECTED" else None,
            ))
        columns.append(views)

    target_words: List[WordView] = []
    for index, word in enumerate(session.target_words):
        found = word in session.found_words
        revealed = word in session.revealed_words
        target_words.append(WordView(
            text=word if found or revealed else mask_word(word),
            found=found,
            revealed=revealed,
            color=word_color(session, index),
        ))

    color_bonus_offered = not session.level.difficulty.colored

    return SessionView(
        level_id=str(session.level.id),
        columns=columns,
        row_count=session.level.row_count,
        current_word=session.current_word,
        word_status=session.classify(),
        target_words=target_words,
        hidden_words=list(session.hidden_words),
        found_count=len(session.found_words),
        total_count=len(session.target_words),
        is_processing=session.is_processing,
        is_won=session.is_won,
        hint_available=any(not (w.found or w.revealed) for w in target_words),
        color_bonus_offered=color_bonus_offered,
        color_bonus_available=color_bonus_offered and not session.is_colored,
        notice=notice,
    )
