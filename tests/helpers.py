"""Shared test utilities."""

from tweet_text.extract import Span


class StubExtractor:
    """In-memory Extractor for tests: returns whatever spans it was given."""

    def __init__(
        self,
        *,
        urls: list[Span] | None = None,
        mentions: list[Span] | None = None,
        hashtags: list[Span] | None = None,
        cashtags: list[Span] | None = None,
    ) -> None:
        self._urls = list(urls or [])
        self._mentions = list(mentions or [])
        self._hashtags = list(hashtags or [])
        self._cashtags = list(cashtags or [])
        self.calls: list[str] = []

    def find_urls(self, text: str) -> list[Span]:
        self.calls.append(text)
        return list(self._urls)

    def find_mentions_or_lists(self, text: str) -> list[Span]:
        return list(self._mentions)

    def find_hashtags(self, text: str) -> list[Span]:
        return list(self._hashtags)

    def find_cashtags(self, text: str) -> list[Span]:
        return list(self._cashtags)


def span_at(text: str, fragment: str, **kwargs: str) -> Span:
    """Return the Span of the first occurrence of *fragment* in *text*."""
    start = text.index(fragment)
    return Span(text=fragment, start=start, end=start + len(fragment), **kwargs)
