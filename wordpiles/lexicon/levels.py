"""Level source loading (JSON or YAML)."""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import ValidationError

from .errors import GameDataError
from .models import LevelConfig


logger = logging.getLogger(__name__)


def parse_levels(raw: Any, source: str = "levels") -> List[LevelConfig]:
    """
    Validate already-decoded level data.

    Accepts either a list of level mappings or a mapping with a ``levels`` key.

    Raises:
        GameDataError: If the data is not a non-empty list of valid levels
    """
    if isinstance(raw, dict) and "levels" in raw:
        raw = raw["levels"]

    if not isinstance(raw, list):
        raise GameDataError(f"{source}: expected a list of levels")
    if not raw:
        raise GameDataError(f"{source}: no levels defined")

    levels: List[LevelConfig] = []
    for i, item in enumerate(raw, start=1):
        try:
            levels.append(LevelConfig.model_validate(item))
        except ValidationError as e:
            raise GameDataError(f"{source}: level #{i} is invalid: {e}") from e

    return levels


def load_levels(path: Union[str, Path]) -> List[LevelConfig]:
    """
    Load the ordered level list from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        FileNotFoundError: If the file does not exist
        GameDataError: If the file cannot be decoded or holds invalid levels
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Levels file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except UnicodeDecodeError as e:
        raise GameDataError(f"{path.name}: level data is not valid UTF-8 ({e})") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise GameDataError(f"{path.name}: could not decode level data ({e})") from e

    levels = parse_levels(raw, source=path.name)
    logger.info("Loaded %d levels from %s", len(levels), path)
    return levels
