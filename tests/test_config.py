"""
Unit tests for exifcore/config.py.
"""

import pytest

from exifcore.config import DecoderConfig


def test_defaults():
    config = DecoderConfig()
    assert config.reject_backward_links is True
    assert config.detect_swapped_byte_order is True
    assert config.max_invalid_format_codes == 5
    assert config.max_depth == 32
    assert config.max_directories == 256
    assert config.store_thumbnail_bytes is True
    assert config.accept_raw_markers is True


def test_from_dict_overrides_selected_settings():
    config = DecoderConfig.from_dict({"max_depth": 4, "reject_backward_links": False})
    assert config.max_depth == 4
    assert config.reject_backward_links is False
    assert config.max_directories == 256


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="max_dpeth"):
        DecoderConfig.from_dict({"max_dpeth": 4})


@pytest.mark.parametrize("name", ["max_invalid_format_codes", "max_depth", "max_directories"])
def test_negative_limits_rejected(name):
    with pytest.raises(ValueError):
        DecoderConfig(**{name: -1})


def test_to_dict_round_trips():
    config = DecoderConfig(max_depth=3, store_thumbnail_bytes=False)
    assert DecoderConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()


def test_repr_lists_settings():
    assert "max_depth=32" in repr(DecoderConfig())
