"""Tweet text length helpers."""

from __future__ import annotations

import logging
import unicodedata

from tweet_text.config import DEFAULT_CONFIG, SHORT_HTTPS_URL_LENGTH, SHORT_URL_LENGTH, ParseConfig
from tweet_text.extract import DEFAULT_EXTRACTOR, Extractor

logger = logging.getLogger(__name__)


def normalize(text: str) -> str:
    """Return the NFC form of *text*.

    U+0065 LATIN SMALL LETTER E followed by U+0301 COMBINING ACUTE ACCENT is
    two codepoints but displays as a single glyph; its NFC form is U+00E9.
    Measuring the NFC form gives the same length whichever form was sent.
    """
    return unicodedata.normalize("NFC", text)


def weighted_length(
    text: str,
    *,
    config: ParseConfig = DEFAULT_CONFIG,
    extractor: Extractor | None = None,
) -> int:
    """Return the weighted length of *text* with every URL counted as a short URL.

    Each URL's own weight is removed from the raw (unscaled) sum and replaced
    by ``config.transformed_url_length``, which is already in character units.
    """
    table = config.table
    raw = table.raw_weight(normalize(text))
    urls = (extractor or DEFAULT_EXTRACTOR).find_urls(text)
    for url in urls:
        raw -= table.raw_weight(normalize(url.text))
    length = raw // table.scale + len(urls) * config.transformed_url_length
    logger.debug("weighted length %d (%d urls)", length, len(urls))
    return length


def legacy_length(text: str, *, extractor: Extractor | None = None) -> int:
    """Return the unweighted NFC codepoint count used by the 140-character limit.

    URLs count as 23 characters when they start with ``https://`` and 22
    otherwise.
    """
    length = len(normalize(text))
    for url in (extractor or DEFAULT_EXTRACTOR).find_urls(text):
        length -= len(url)
        if url.text.startswith("https://"):
            length += SHORT_HTTPS_URL_LENGTH
        else:
            length += SHORT_URL_LENGTH
    return length
