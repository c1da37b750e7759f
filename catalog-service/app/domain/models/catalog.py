import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

# Anything shaped like an HTML tag, attributes included
HTML_TAG_PATTERN = re.compile(r"<[^>]+>", re.IGNORECASE)

Rating = Union[int, float]


@dataclass(frozen=True)
class GameSummary:
    """A game as listed by the catalog."""

    id: int
    name: str
    image: Optional[str]
    genres: Tuple[str, ...]
    rating: Rating
    platforms: Tuple[str, ...]
    release_date: Optional[str]


@dataclass(frozen=True)
class GameSearchResult:
    """A game matched by a name search."""

    id: int
    name: str
    image: Optional[str]
    genres: Tuple[str, ...]


@dataclass(frozen=True)
class GameDetail:
    """Full detail of a single game. The description is plain text."""

    name: str
    image: Optional[str]
    description: str
    genres: Tuple[str, ...]
    rating: Rating
    total_reviews: int
    platforms: Tuple[str, ...]
    release_date: Optional[str]
    stores: Tuple[str, ...]

    def __post_init__(self):
        if HTML_TAG_PATTERN.search(self.description):
            raise ValueError("GameDetail description must not contain markup")
