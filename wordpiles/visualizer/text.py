"""Render a SessionView as plain text for terminal play."""

from typing import List

from ..engine.models import SessionView, TileView


STATUS_LABELS = {
    "EMPTY": "",
    "ALREADY_FOUND": "already found",
    "TARGET_UNFOUND": "target word!",
    "IN_DICTIONARY": "bonus word!",
    "INVALID": "not a word",
}


def render_tile(tile: TileView) -> str:
    """Three-character cell: [X] selected, *X* committed, ' X ' clickable, ' x ' blocked."""
    if tile.state == "SELECTED":
        if tile.confirmed:
            return f"*{tile.char}*"
        return f"[{tile.char}]"
    if tile.state == "ACTIVE":
        return f" {tile.char} "
    return f" {tile.char.lower()} "


def render_board(view: SessionView) -> str:
    """Columns drawn bottom-up with column numbers underneath."""
    if not view.columns:
        return ""

    height = max([view.row_count] + [len(column) for column in view.columns])
    lines: List[str] = []
    for row in range(height - 1, -1, -1):
        cells = [
            render_tile(column[row]) if row < len(column) else " . "
            for column in view.columns
        ]
        lines.append(' '.join(cells).rstrip())

    lines.append(' '.join(f"{i:^3}" for i in range(len(view.columns))).rstrip())
    return '\n'.join(lines)


def render_words(view: SessionView) -> str:
    """Target list, found count and discovered hidden words."""
    words = []
    for word in view.target_words:
        text = word.text
        if word.found:
            text = f"+{text}"
        elif word.revealed:
            text = f"?{text}"
        words.append(text)

    lines = [f"Words ({view.found_count}/{view.total_count}): {'  '.join(words)}"]
    if view.hidden_words:
        lines.append(f"Bonus words: {', '.join(view.hidden_words)}")
    return '\n'.join(lines)


def render_view(view: SessionView) -> str:
    """Full frame: header, word list, board and current selection."""
    lines = [f"=== Level {view.level_id} ==="]
    if view.notice:
        lines.append(view.notice)
    lines.append(render_words(view))
    lines.append("")
    lines.append(render_board(view))
    lines.append("")

    status = STATUS_LABELS.get(view.word_status, "")
    word_line = f"Word: {view.current_word}"
    if status:
        word_line += f"  ({status})"
    lines.append(word_line)

    if view.is_won:
        lines.append("*** Level complete! Type 'n' for the next level. ***")
    return '\n'.join(lines)
