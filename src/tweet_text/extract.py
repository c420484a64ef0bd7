"""Entity extraction: URLs, @mentions and lists, #hashtags and $cashtags.

The length and validation code only talks to the :class:`Extractor` protocol.
:class:`RegexExtractor` is the implementation used when no other is supplied.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from tweet_text import patterns


@dataclass(frozen=True)
class Span:
    """A recognized entity and where it sits in the original text.

    ``start``/``end`` are codepoint offsets; ``text == source[start:end]``.
    ``screen_name`` and ``list_slug`` are only set for mention/list spans.
    """

    text: str
    start: int
    end: int
    screen_name: str = ""
    list_slug: str = ""

    def __len__(self) -> int:
        return self.end - self.start


class Extractor(Protocol):
    """Interface for finding entities in tweet text."""

    def find_urls(self, text: str) -> list[Span]:
        """Return URL spans, ordered by position."""
        ...

    def find_mentions_or_lists(self, text: str) -> list[Span]:
        """Return ``@user`` and ``@user/list`` spans, ordered by position."""
        ...

    def find_hashtags(self, text: str) -> list[Span]:
        """Return ``#hashtag`` spans, ordered by position."""
        ...

    def find_cashtags(self, text: str) -> list[Span]:
        """Return ``$CASH`` spans, ordered by position."""
        ...


class RegexExtractor:
    """Extractor driven by the patterns in :mod:`tweet_text.patterns`.

    Stateless; one instance can be shared freely.
    """

    def __init__(self, *, urls_without_protocol: bool = True) -> None:
        self._urls_without_protocol = urls_without_protocol

    def find_urls(self, text: str) -> list[Span]:
        if not text or "." not in text:
            return []
        urls: list[Span] = []
        for match in patterns.VALID_URL.finditer(text):
            url = match.group("url")
            start, end = match.span("url")
            if match.group("protocol"):
                tco = patterns.VALID_TCO_URL.match(url)
                if tco:
                    url = tco.group()
                    end = start + len(url)
                urls.append(Span(text=url, start=start, end=end))
                continue
            if not self._urls_without_protocol:
                continue
            urls.extend(self._ascii_domain_urls(text, match))
        return urls

    def _ascii_domain_urls(self, text: str, match: re.Match[str]) -> list[Span]:
        """Split a protocol-less candidate into its ASCII-only domains."""
        domain = match.group("domain")
        domain_start = match.start("domain")
        has_path = match.group("path") is not None
        found: list[Span] = []
        last: Span | None = None
        last_is_short = False
        for ascii_match in patterns.VALID_ASCII_DOMAIN.finditer(domain):
            start = domain_start + ascii_match.start()
            last = Span(text=ascii_match.group(), start=start, end=start + len(ascii_match.group()))
            last_is_short = patterns.INVALID_SHORT_DOMAIN.search(ascii_match.group()) is not None
            if not last_is_short:
                found.append(last)
        if last is None or not has_path:
            return found
        # The trailing path and query belong to the last domain.
        extended = Span(text=text[last.start:match.end("url")], start=last.start, end=match.end("url"))
        if found and found[-1] == last:
            found[-1] = extended
        elif last_is_short:
            found.append(extended)
        return found

    def find_mentions_or_lists(self, text: str) -> list[Span]:
        if not text or not patterns.AT_SIGNS.search(text):
            return []
        mentions: list[Span] = []
        for match in patterns.VALID_MENTION_OR_LIST.finditer(text):
            after = text[match.end():match.end() + 3]
            if after and patterns.END_MENTION_MATCH.match(after):
                continue
            start = match.start("at")
            mentions.append(Span(
                text=text[start:match.end()],
                start=start,
                end=match.end(),
                screen_name=match.group("screen_name"),
                list_slug=match.group("list_slug") or "",
            ))
        return mentions

    def find_hashtags(self, text: str) -> list[Span]:
        if not text:
            return []
        tags: list[Span] = []
        for match in patterns.VALID_HASHTAG.finditer(text):
            after = text[match.end():match.end() + 3]
            if after and patterns.END_HASHTAG_MATCH.match(after):
                continue
            start = match.start("hash")
            tags.append(Span(text=text[start:match.end()], start=start, end=match.end()))
        urls = self.find_urls(text)
        return [t for t in tags if not _overlaps_any(t, urls)]

    def find_cashtags(self, text: str) -> list[Span]:
        if not text or not any(sign in text for sign in "$＄﹩"):
            return []
        tags: list[Span] = []
        for match in patterns.VALID_CASHTAG.finditer(text):
            start = match.start("dollar")
            tags.append(Span(text=text[start:match.end()], start=start, end=match.end()))
        return tags


def _overlaps_any(span: Span, others: list[Span]) -> bool:
    return any(span.start < other.end and other.start < span.end for other in others)


DEFAULT_EXTRACTOR = RegexExtractor()
