"""Tests for pharmapack/models/settings.py"""

import pytest

from pharmapack.models import ParserSettings


class TestParserSettings:
    def test_defaults(self, settings):
        assert settings.currency_marker == "৳"
        assert settings.list_separator == ","
        assert settings.price_anchor == ": ৳"
        assert settings.doubled_separator == ",,"

    def test_empty_marker_rejected(self):
        with pytest.raises(ValueError):
            ParserSettings(currency_marker="")

    def test_zero_limit_rejected(self):
        with pytest.raises(ValueError):
            ParserSettings(max_pack_blocks=0)

    @pytest.mark.parametrize("text", ["Not for sale", "not for sale", "  Price Unavailable "])
    def test_is_sentinel(self, settings, text):
        assert settings.is_sentinel(text)

    def test_is_not_sentinel(self, settings):
        assert not settings.is_sentinel("100 ml bottle")


class TestFromDict:
    def test_overrides_known_keys(self):
        settings = ParserSettings.from_dict({"currency_marker": "$", "max_priced_segments": 9})
        assert settings.currency_marker == "$"
        assert settings.max_priced_segments == 9
        assert settings.max_plain_segments == 3

    def test_ignores_unknown_keys(self):
        settings = ParserSettings.from_dict({"unrelated": True})
        assert settings == ParserSettings()

    def test_empty_or_none(self):
        assert ParserSettings.from_dict({}) == ParserSettings()
        assert ParserSettings.from_dict(None) == ParserSettings()

    def test_sentinel_list_becomes_tuple(self):
        settings = ParserSettings.from_dict({"sentinel_descriptions": ["N/A"]})
        assert settings.sentinel_descriptions == ("N/A",)
