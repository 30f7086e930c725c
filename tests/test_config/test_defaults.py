"""Tests for package defaults."""

from crptapi.config.defaults import (
    DEFAULT_API_URL,
    DEFAULT_IMPORT_REQUEST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_LIMIT,
    DEFAULT_TIME_UNIT,
    METADATA_KEYS,
    get_defaults,
)
from crptapi.types import DocumentMetadata, TimeUnit


class TestDefaults:
    def test_default_endpoint(self):
        assert DEFAULT_API_URL == "https://ismp.crpt.ru/api/v3/lk/documents/create"

    def test_default_rate_limit(self):
        assert DEFAULT_REQUEST_LIMIT == 10
        assert TimeUnit(DEFAULT_TIME_UNIT) is TimeUnit.MINUTES

    def test_default_import_request(self):
        assert DEFAULT_IMPORT_REQUEST is True

    def test_default_log_level(self):
        assert DEFAULT_LOG_LEVEL == "WARNING"

    def test_get_defaults_has_all_metadata(self):
        defaults = get_defaults()
        for key in METADATA_KEYS:
            assert key in defaults

    def test_metadata_keys_match_model(self):
        assert set(METADATA_KEYS) == set(DocumentMetadata.model_fields)

    def test_metadata_defaults_agree_with_model(self):
        defaults = get_defaults()
        meta = DocumentMetadata()
        for key in METADATA_KEYS:
            assert defaults[key] == getattr(meta, key)

    def test_get_defaults_returns_copy(self):
        first = get_defaults()
        first["request_limit"] = 99
        assert get_defaults()["request_limit"] == DEFAULT_REQUEST_LIMIT
