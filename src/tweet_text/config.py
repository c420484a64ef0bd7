"""Parsing configuration: length limits, URL length and weight tables."""

from __future__ import annotations

import json
import logging
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

import dotenv
import requests

from tweet_text.weights import DEFAULT_TABLE, UNWEIGHTED_TABLE, WeightRange, WeightTable

logger = logging.getLogger(__name__)

_ENV_PATH = pathlib.Path.cwd() / ".env"
_ENV_VAR = "TWEET_TEXT_CONFIG"
_REQUEST_TIMEOUT = 10

# Legacy (unweighted) limits.
MAX_LENGTH = 140
SHORT_URL_LENGTH = 22
SHORT_HTTPS_URL_LENGTH = 23


@dataclass(frozen=True)
class ParseConfig:
    """Limits and weights used by :func:`tweet_text.validate.parse_tweet`."""

    version: int
    max_weighted_length: int
    transformed_url_length: int
    table: WeightTable

    def __post_init__(self) -> None:
        if self.max_weighted_length <= 0:
            raise ValueError(
                f"maxWeightedTweetLength must be positive, got {self.max_weighted_length}.",
            )
        if self.transformed_url_length < 0:
            raise ValueError(
                f"transformedURLLength must not be negative, got {self.transformed_url_length}.",
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParseConfig:
        """Build a config from the published camelCase JSON layout."""
        try:
            ranges = tuple(
                WeightRange(start=int(r["start"]), end=int(r["end"]), weight=int(r["weight"]))
                for r in data.get("ranges", [])
            )
            table = WeightTable(
                ranges=ranges,
                default_weight=int(data["defaultWeight"]),
                scale=int(data["scale"]),
            )
            return cls(
                version=int(data["version"]),
                max_weighted_length=int(data["maxWeightedTweetLength"]),
                transformed_url_length=int(data["transformedURLLength"]),
                table=table,
            )
        except KeyError as exc:
            raise ValueError(f"Config is missing required key {exc}.") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "maxWeightedTweetLength": self.max_weighted_length,
            "scale": self.table.scale,
            "defaultWeight": self.table.default_weight,
            "transformedURLLength": self.transformed_url_length,
            "ranges": [
                {"start": r.start, "end": r.end, "weight": r.weight}
                for r in self.table.ranges
            ],
        }


CONFIG_V1 = ParseConfig(
    version=1,
    max_weighted_length=140,
    transformed_url_length=23,
    table=UNWEIGHTED_TABLE,
)
CONFIG_V2 = ParseConfig(
    version=2,
    max_weighted_length=280,
    transformed_url_length=23,
    table=DEFAULT_TABLE,
)
DEFAULT_CONFIG = CONFIG_V2

_BUILTIN_CONFIGS = {"v1": CONFIG_V1, "v2": CONFIG_V2}


class ConfigStore(Protocol):
    """Source of a :class:`ParseConfig`."""

    def load(self) -> ParseConfig: ...


class JsonConfigStore:
    """Config read from a local JSON file in the published layout."""

    def __init__(self, path: pathlib.Path) -> None:
        self._path = path

    def load(self) -> ParseConfig:
        logger.debug("Loading parse config from %s", self._path)
        data = json.loads(self._path.read_text(encoding="utf-8"))
        return ParseConfig.from_dict(data)


class RemoteConfigStore:
    """Config fetched over HTTP(S), e.g. a raw file from a published repository.

    Usage::

        config = RemoteConfigStore("https://example.org/v2.json").load()
    """

    def __init__(self, url: str, *, session: requests.Session | None = None) -> None:
        self._url = url
        self._session = session or requests.Session()

    def load(self) -> ParseConfig:
        logger.debug("Fetching parse config from %s", self._url)
        resp = self._session.get(self._url, timeout=_REQUEST_TIMEOUT)
        resp.raise_for_status()
        return ParseConfig.from_dict(resp.json())


def _store_for(source: str) -> ConfigStore:
    if source.lower().startswith(("http://", "https://")):
        return RemoteConfigStore(source)
    return JsonConfigStore(pathlib.Path(source))


def load_config(source: str | None = None) -> ParseConfig:
    """Resolve the parse config to use.

    *source* may be ``"v1"``/``"v2"``, a JSON file path or an http(s) URL.
    Without *source*, ``TWEET_TEXT_CONFIG`` (optionally set in ``.env``) is
    consulted; if that is unset too, :data:`DEFAULT_CONFIG` is returned.
    """
    if source is None:
        dotenv.load_dotenv(_ENV_PATH)
        source = os.getenv(_ENV_VAR) or None
    if source is None:
        return DEFAULT_CONFIG
    builtin = _BUILTIN_CONFIGS.get(source.lower())
    if builtin is not None:
        return builtin
    config = _store_for(source).load()
    logger.info(
        "Loaded parse config version %d (limit %d) from %s",
        config.version, config.max_weighted_length, source,
    )
    return config
