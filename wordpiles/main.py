"""
Main entry point for playing word piles in a terminal.

Usage:
    python -m wordpiles.main config.yaml
    python -m wordpiles.main --levels levels.json --dictionary words.txt --seed 7
    python -m wordpiles.main --levels levels.json --level 3 --show
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

import yaml

from .engine import GameConfig, ScheduledTask, Tile, WordPiles, selectable_tile, topmost_selected
from .lexicon import Dictionary, load_levels
from .visualizer import render_view


HELP = """Commands:
  <col>      take the next letter from column <col>
  u <col>    put back the top selected letter of column <col>
  c          confirm the word (or clear an invalid selection)
  h          hint: reveal the next target word
  b          bonus: switch word colors on
  r          restart the level with the words still missing
  n          next level
  q          quit"""


def configure_logging(verbose: bool = False) -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def run_tasks(
    game: WordPiles,
    task: Optional[ScheduledTask],
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Fulfill scheduled continuations, including any follow-ups they request."""
    while task is not None:
        sleep(task.delay_ms / 1000)
        task = game.complete(task)


def handle_command(
    game: WordPiles,
    command: str,
    output: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Apply one line of terminal input.

    Returns:
        False when the player asked to quit
    """
    parts = command.strip().split()
    if not parts:
        parts = ["c"]

    name, args = parts[0].lower(), parts[1:]
    session = game.session

    if name == "q":
        return False

    if name == "?":
        output(HELP)
    elif name.isdigit() or (name == "s" and args):
        column = _column(game, name if name.isdigit() else args[0])
        tile = selectable_tile(column, session.selected_ids) if column is not None else None
        if tile is None or not game.select(tile.id):
            output("Nothing to take there.")
    elif name == "u" and args:
        column = _column(game, args[0])
        tile = topmost_selected(column, session.selected_ids) if column is not None else None
        if tile is None or not game.deselect(tile.id):
            output("Nothing to put back there.")
    elif name == "c":
        task = game.confirm_or_reset()
        if task is not None and task.kind == "clear_selection":
            output(f"Bonus word: {session.hidden_words[-1]}")
        run_tasks(game, task, sleep)
    elif name == "h":
        word = game.hint()
        output(f"Hint: {word}" if word else "No hints left.")
    elif name == "b":
        if not game.reveal_colors_bonus():
            output("Colors are already on.")
    elif name == "r":
        game.restart()
    elif name == "n":
        game.advance_level()
    else:
        output(f"Unknown command: {command.strip()}")

    return True


def _column(game: WordPiles, raw: str) -> Optional[List[Tile]]:
    if not raw.isdigit():
        return None
    index = int(raw)
    columns = game.session.board.columns
    return columns[index] if index < len(columns) else None


def play(
    game: WordPiles,
    read: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Interactive loop: render, read a command, apply it."""
    output(HELP)
    while True:
        output("")
        output(render_view(game.view()))
        try:
            command = read("> ")
        except EOFError:
            break
        if not handle_command(game, command, output=output, sleep=sleep):
            break


def main():
    parser = argparse.ArgumentParser(
        description="Play word piles in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  levels_path: levels.json
  dictionary_path: russian_dictionary.txt
  seed: 42
  start_level: 0
  found_delay_ms: 800
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--levels",
        help="Level file (.json or .yaml); overrides levels_path"
    )
    parser.add_argument(
        "--dictionary",
        help="Newline-delimited word list; overrides dictionary_path"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible boards"
    )
    parser.add_argument(
        "--level",
        type=int,
        help="Level index to start on (0-based)"
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the generated board and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress to stderr"
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = {
        "levels_path": args.levels,
        "dictionary_path": args.dictionary,
        "seed": args.seed,
        "start_level": args.level,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    if not config.levels_path:
        print("Error: a levels file is required (config levels_path or --levels)", file=sys.stderr)
        sys.exit(1)

    try:
        levels = load_levels(config.levels_path)
        dictionary = Dictionary.load(config.dictionary_path) if config.dictionary_path else Dictionary()
    except (OSError, ValueError) as e:
        print(f"Error loading game data: {e}", file=sys.stderr)
        sys.exit(1)

    game = WordPiles.create(levels, dictionary=dictionary, config=config)

    if args.show:
        print(render_view(game.view()))
        return 0

    try:
        play(game)
    except KeyboardInterrupt:
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
