"""Tests for CacheConfig validation and defaults."""

import pytest
from pydantic import ValidationError

from fscache.config.defaults import get_defaults
from fscache.config.schema import CacheConfig


class TestDefaults:
    def test_get_defaults_keys(self):
        assert set(get_defaults()) == {"encoding", "chunk_size", "watch", "log_level"}

    def test_model_matches_defaults(self):
        assert CacheConfig().model_dump() == get_defaults()


class TestCacheConfig:
    def test_unknown_encoding(self):
        with pytest.raises(ValidationError, match="Unknown encoding"):
            CacheConfig(encoding="not-a-codec")

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            CacheConfig(chunk_size=-1)

    def test_log_level_normalized(self):
        assert CacheConfig(log_level="info").log_level == "INFO"

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            CacheConfig(log_level="chatty")

    def test_from_mapping_drops_unknown(self):
        config = CacheConfig.from_mapping({"encoding": "ascii", "other": True})
        assert config.encoding == "ascii"
