"""Tests for ParseConfig, the config stores and load_config."""

import json
import pathlib
from unittest.mock import MagicMock, patch

import pytest
import requests

from tweet_text.config import (
    CONFIG_V1,
    CONFIG_V2,
    DEFAULT_CONFIG,
    JsonConfigStore,
    ParseConfig,
    RemoteConfigStore,
    load_config,
)
from tweet_text.weights import DEFAULT_TABLE, WeightRange, WeightTable

_V2_JSON = {
    "version": 2,
    "maxWeightedTweetLength": 280,
    "scale": 100,
    "defaultWeight": 200,
    "transformedURLLength": 23,
    "ranges": [
        {"start": 0, "end": 4351, "weight": 100},
        {"start": 8192, "end": 8205, "weight": 100},
        {"start": 8208, "end": 8223, "weight": 100},
        {"start": 8242, "end": 8247, "weight": 100},
    ],
}


# --- WeightTable ---


class TestWeightTable:
    def test_first_matching_range_wins(self) -> None:
        assert DEFAULT_TABLE.weight_of(ord("a")) == 100
        assert DEFAULT_TABLE.weight_of(0x2014) == 100

    def test_unmatched_codepoint_gets_default_weight(self) -> None:
        assert DEFAULT_TABLE.weight_of(ord("日")) == 200
        assert DEFAULT_TABLE.weight_of(0x2026) == 200

    def test_range_bounds_are_inclusive(self) -> None:
        assert DEFAULT_TABLE.weight_of(4351) == 100
        assert DEFAULT_TABLE.weight_of(4352) == 200

    def test_rejects_overlapping_ranges(self) -> None:
        with pytest.raises(ValueError, match="overlaps"):
            WeightTable(
                ranges=(WeightRange(0, 10, 1), WeightRange(5, 20, 1)),
                default_weight=2,
                scale=1,
            )

    def test_rejects_unordered_ranges(self) -> None:
        with pytest.raises(ValueError, match="overlaps or precedes"):
            WeightTable(
                ranges=(WeightRange(20, 30, 1), WeightRange(0, 10, 1)),
                default_weight=2,
                scale=1,
            )

    def test_rejects_non_positive_scale(self) -> None:
        with pytest.raises(ValueError, match="Scale must be positive"):
            WeightTable(ranges=(), default_weight=1, scale=0)


# --- ParseConfig ---


class TestParseConfig:
    def test_from_dict_matches_builtin_v2(self) -> None:
        assert ParseConfig.from_dict(_V2_JSON) == CONFIG_V2

    def test_to_dict_uses_published_keys(self) -> None:
        assert CONFIG_V2.to_dict() == _V2_JSON

    def test_missing_key(self) -> None:
        data = dict(_V2_JSON)
        del data["scale"]
        with pytest.raises(ValueError, match="missing required key 'scale'"):
            ParseConfig.from_dict(data)

    def test_ranges_are_optional(self) -> None:
        data = {k: v for k, v in _V2_JSON.items() if k != "ranges"}
        assert ParseConfig.from_dict(data).table.ranges == ()

    def test_rejects_non_positive_limit(self) -> None:
        with pytest.raises(ValueError, match="maxWeightedTweetLength"):
            ParseConfig.from_dict({**_V2_JSON, "maxWeightedTweetLength": 0})


# --- JsonConfigStore ---


class TestJsonConfigStore:
    def test_loads_file(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "v2.json"
        path.write_text(json.dumps(_V2_JSON), encoding="utf-8")
        assert JsonConfigStore(path).load() == CONFIG_V2

    def test_missing_file_raises(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            JsonConfigStore(tmp_path / "missing.json").load()


# --- RemoteConfigStore ---


class TestRemoteConfigStore:
    def test_fetches_and_parses(self) -> None:
        session = MagicMock()
        session.get.return_value = _ok_response(_V2_JSON)
        store = RemoteConfigStore("https://example.org/v2.json", session=session)
        assert store.load() == CONFIG_V2
        session.get.assert_called_once_with("https://example.org/v2.json", timeout=10)

    def test_raises_on_404(self) -> None:
        session = MagicMock()
        session.get.return_value = _error_response(404)
        store = RemoteConfigStore("https://example.org/missing.json", session=session)
        with pytest.raises(requests.HTTPError):
            store.load()


# --- load_config ---


class TestLoadConfig:
    def test_builtin_names(self) -> None:
        assert load_config("v1") is CONFIG_V1
        assert load_config("V2") is CONFIG_V2

    def test_path_source(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(
            json.dumps({**_V2_JSON, "maxWeightedTweetLength": 500}), encoding="utf-8",
        )
        assert load_config(str(path)).max_weighted_length == 500

    @patch("tweet_text.config.RemoteConfigStore")
    def test_url_source(self, mock_store_cls: MagicMock) -> None:
        mock_store_cls.return_value.load.return_value = CONFIG_V1
        assert load_config("https://example.org/v1.json") is CONFIG_V1
        mock_store_cls.assert_called_once_with("https://example.org/v1.json")

    @patch("tweet_text.config.dotenv.load_dotenv")
    def test_env_var_source(
        self, _load: object, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = tmp_path / "env.json"
        path.write_text(
            json.dumps({**_V2_JSON, "maxWeightedTweetLength": 300}), encoding="utf-8",
        )
        monkeypatch.setenv("TWEET_TEXT_CONFIG", str(path))
        assert load_config().max_weighted_length == 300

    @patch("tweet_text.config.dotenv.load_dotenv")
    def test_defaults_without_source(
        self, mock_load: MagicMock, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("TWEET_TEXT_CONFIG", raising=False)
        assert load_config() is DEFAULT_CONFIG
        mock_load.assert_called_once()

    @patch("tweet_text.config.dotenv.load_dotenv")
    def test_explicit_source_skips_dotenv(self, mock_load: MagicMock) -> None:
        load_config("v1")
        mock_load.assert_not_called()


# --- helpers ---


def _ok_response(json_data: dict) -> MagicMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.ok = True
    resp.json.return_value = json_data
    resp.raise_for_status.return_value = None
    return resp


def _error_response(status_code: int) -> MagicMock:
    from requests.exceptions import HTTPError

    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = False
    resp.text = "error"
    resp.raise_for_status.side_effect = HTTPError(response=resp)
    return resp
