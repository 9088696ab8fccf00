"""Data models for level configuration and word matching."""

from typing import List, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


PlacementOrder = Literal["random", "linear", "cluster"]
LetterSortMode = Literal["direct", "keep_base", "mirror", "random"]
WordStatus = Literal["EMPTY", "ALREADY_FOUND", "TARGET_UNFOUND", "IN_DICTIONARY", "INVALID"]


class Difficulty(BaseModel):
    """How a level scrambles and places its letters."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    placement_order: PlacementOrder = Field(
        "random",
        validation_alias=AliasChoices("placement_order", "placementOrder", "order"),
    )
    letter_sort_mode: LetterSortMode = Field(
        "direct",
        validation_alias=AliasChoices("letter_sort_mode", "letterSortMode", "letters"),
    )
    colored: bool = True
    follow_order: bool = Field(
        True,
        validation_alias=AliasChoices("follow_order", "followOrder", "follow"),
    )


class LevelConfig(BaseModel):
    """A single level as read from the level source."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Union[int, str]
    column_count: int = Field(
        ..., ge=1,
        validation_alias=AliasChoices("column_count", "columnCount", "cols"),
    )
    row_count: int = Field(
        ..., ge=1,
        validation_alias=AliasChoices("row_count", "rowCount", "rows"),
    )
    words: List[str] = Field(..., min_length=1)
    difficulty: Difficulty = Field(default_factory=Difficulty)

    @field_validator("words")
    @classmethod
    def _validate_words(cls, words: List[str]) -> List[str]:
        if any(not word.strip() for word in words):
            raise ValueError("level words must not be blank")
        normalized = [word.strip().upper() for word in words]
        if len(set(normalized)) != len(normalized):
            raise ValueError("level words must be unique")
        return words

    @model_validator(mode="before")
    @classmethod
    def _lift_follow_flag(cls, data):
        # Older level files keep `follow` next to `difficulty` instead of inside it
        if isinstance(data, dict) and "follow" in data:
            data = dict(data)
            follow = data.pop("follow")
            difficulty = dict(data.get("difficulty") or {})
            difficulty.setdefault("follow", follow)
            data["difficulty"] = difficulty
        return data

    @property
    def normalized_words(self) -> List[str]:
        """Target words trimmed and uppercased, in file order."""
        return [word.strip().upper() for word in self.words]
