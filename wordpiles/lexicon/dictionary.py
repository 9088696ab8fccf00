# Word list used to recognise hidden (bonus) words.
# The source is a plain newline-delimited file; matching is case-insensitive
# because every entry is trimmed and uppercased at load time.

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import GameDataError


logger = logging.getLogger(__name__)


def normalize_word(word: str) -> str:
    """Trim and uppercase a word the way the dictionary stores it."""
    return word.strip().upper()


class Dictionary(BaseModel):
    """Immutable set of valid words."""
    model_config = ConfigDict(frozen=True)

    words: FrozenSet[str] = Field(default_factory=frozenset)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Dictionary":
        """Build a dictionary from raw words, dropping blanks."""
        return cls(words=frozenset(
            normalized for normalized in (normalize_word(w) for w in words) if normalized
        ))

    @classmethod
    def from_text(cls, text: str) -> "Dictionary":
        """Parse newline-delimited text."""
        return cls.from_words(text.splitlines())

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Dictionary":
        """
        Load a newline-delimited word list.

        Raises:
            FileNotFoundError: If the file does not exist
            GameDataError: If the file cannot be decoded
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise GameDataError(f"{path.name}: dictionary is not valid UTF-8 ({e})") from e

        dictionary = cls.from_text(text)
        logger.info("Loaded %d dictionary words from %s", len(dictionary), path)
        return dictionary

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word in self.words

    def __len__(self) -> int:
        return len(self.words)
