"""Tweet validation: emptiness, length limits, forbidden characters and entities."""

from __future__ import annotations

from dataclasses import dataclass

from tweet_text.config import DEFAULT_CONFIG, MAX_LENGTH, ParseConfig
from tweet_text.extract import DEFAULT_EXTRACTOR, Extractor
from tweet_text.patterns import INVALID_CHARACTERS
from tweet_text.text import legacy_length, weighted_length
from tweet_text.url import is_valid_url

__all__ = [
    "EmptyError",
    "InvalidCharacterError",
    "ParseResult",
    "TooLongError",
    "ValidationError",
    "is_valid_hashtag",
    "is_valid_list",
    "is_valid_tweet",
    "is_valid_url",
    "is_valid_username",
    "parse_tweet",
    "validate_tweet",
]


@dataclass(frozen=True)
class EmptyError:
    """The text is empty."""

    @property
    def message(self) -> str:
        return "Tweets may not be empty"


@dataclass(frozen=True)
class TooLongError:
    """The text is longer than the limit it was checked against."""

    length: int
    limit: int = MAX_LENGTH

    @property
    def message(self) -> str:
        return f"Length {self.length} exceeds {self.limit} characters"


@dataclass(frozen=True)
class InvalidCharacterError:
    """The text contains a forbidden codepoint.

    ``offset`` is the UTF-8 byte offset of its first occurrence.
    """

    character: str
    offset: int

    @property
    def message(self) -> str:
        return (
            f"Invalid character [U+{ord(self.character):04X}] "
            f"found at byte offset {self.offset}"
        )


ValidationError = EmptyError | TooLongError | InvalidCharacterError


@dataclass(frozen=True)
class ParseResult:
    """Outcome of :func:`parse_tweet`.

    ``permillage`` is the weighted length in thousandths of the limit.  It is
    not clamped, so over-long text reports more than 1000.
    """

    weighted_length: int
    permillage: int
    valid: bool


def _find_invalid_character(text: str) -> InvalidCharacterError | None:
    for index, ch in enumerate(text):
        if ch in INVALID_CHARACTERS:
            offset = len(text[:index].encode("utf-8", "surrogatepass"))
            return InvalidCharacterError(character=ch, offset=offset)
    return None


def _check(text: str, length: int, limit: int) -> ValidationError | None:
    """Apply the checks in priority order; the first failure wins."""
    if text == "":
        return EmptyError()
    if length > limit:
        return TooLongError(length=length, limit=limit)
    return _find_invalid_character(text)


def validate_tweet(
    text: str,
    max_length: int = MAX_LENGTH,
    *,
    extractor: Extractor | None = None,
) -> ValidationError | None:
    """Check *text* against the legacy unweighted limit.

    Returns ``None`` for a valid tweet, otherwise the first failing check:
    empty text, then length, then forbidden characters.
    """
    # Empty text fails before the extractor is consulted.
    if text == "":
        return EmptyError()
    return _check(text, legacy_length(text, extractor=extractor), max_length)


def is_valid_tweet(text: str) -> bool:
    """Whether *text* passes :func:`validate_tweet` with the default limit."""
    return validate_tweet(text) is None


def parse_tweet(
    text: str,
    *,
    config: ParseConfig = DEFAULT_CONFIG,
    extractor: Extractor | None = None,
) -> tuple[ParseResult, ValidationError | None]:
    """Measure *text* with the weighted rules of *config* and validate it."""
    length = weighted_length(text, config=config, extractor=extractor)
    limit = config.max_weighted_length
    error = _check(text, length, limit)
    result = ParseResult(
        weighted_length=length,
        permillage=length * 1000 // limit,
        valid=error is None,
    )
    return result, error


def is_valid_username(text: str, *, extractor: Extractor | None = None) -> bool:
    """Whether *text* is exactly one @mention, such as ``@jack``."""
    if not text:
        return False
    mentions = [
        m for m in (extractor or DEFAULT_EXTRACTOR).find_mentions_or_lists(text)
        if not m.list_slug
    ]
    return len(mentions) == 1 and mentions[0].text == text


def is_valid_list(text: str, *, extractor: Extractor | None = None) -> bool:
    """Whether *text* is exactly one list reference, such as ``@jack/friends``."""
    if not text:
        return False
    lists = (extractor or DEFAULT_EXTRACTOR).find_mentions_or_lists(text)
    return len(lists) == 1 and lists[0].text == text and lists[0].list_slug != ""


def is_valid_hashtag(text: str, *, extractor: Extractor | None = None) -> bool:
    """Whether *text* is exactly one hashtag, such as ``#python``."""
    if not text:
        return False
    hashtags = (extractor or DEFAULT_EXTRACTOR).find_hashtags(text)
    return len(hashtags) == 1 and hashtags[0].text == text
