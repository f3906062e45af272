from __future__ import annotations

"""
Unit tests for the Configuration Validator.
"""

import pytest

from aiask.core.pipeline.validator import validate_config
from aiask.domain.config import DEFAULT_INCLUDE_EXTENSIONS, get_default_config


def test_empty_config_yields_defaults():
    conf, warnings = validate_config({})

    assert conf == get_default_config()
    assert warnings == []


def test_non_dict_config_falls_back_with_warning():
    conf, warnings = validate_config(["ts"])

    assert conf["include_file_extensions"] == DEFAULT_INCLUDE_EXTENSIONS
    assert warnings


def test_non_dict_config_raises_in_strict_mode():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_leading_dots_are_stripped():
    conf, warnings = validate_config({"include_file_extensions": [".ts", "py", "..json"]})

    assert conf["include_file_extensions"] == ["ts", "py", "json"]
    assert any("corrected" in w for w in warnings)


def test_extension_case_is_preserved():
    conf, _ = validate_config({"include_file_extensions": ["TS", "ts"]})

    assert conf["include_file_extensions"] == ["TS", "ts"]


def test_csv_string_is_split():
    conf, warnings = validate_config({"include_file_extensions": "ts, py ,,css"})

    assert conf["include_file_extensions"] == ["ts", "py", "css"]
    assert warnings


def test_explicit_empty_extension_list_is_kept():
    conf, warnings = validate_config({"include_file_extensions": []})

    assert conf["include_file_extensions"] == []
    assert warnings == []


def test_blank_extensions_reduce_to_empty_list():
    conf, _ = validate_config({"include_file_extensions": ["", "  ", "."]})

    assert conf["include_file_extensions"] == []


def test_missing_extension_list_uses_defaults():
    conf, _ = validate_config({"include_file_extensions": None})

    assert conf["include_file_extensions"] == DEFAULT_INCLUDE_EXTENSIONS


def test_leading_dot_raises_in_strict_mode():
    with pytest.raises(ValueError):
        validate_config({"include_file_extensions": [".ts"]}, strict=True)


def test_invalid_target_model_falls_back():
    conf, warnings = validate_config({"target_model": 7})

    assert conf["target_model"] == get_default_config()["target_model"]
    assert warnings


def test_non_string_items_are_discarded():
    conf, warnings = validate_config({"include_file_extensions": ["ts", 3]})

    assert conf["include_file_extensions"] == ["ts"]
    assert any("discarded" in w for w in warnings)


def test_bool_coercion():
    conf, warnings = validate_config({"detect_cycles": "yes", "count_tokens": 0})

    assert conf["detect_cycles"] is True
    assert conf["count_tokens"] is False
    assert len(warnings) == 2


def test_unknown_keys_are_dropped():
    conf, _ = validate_config({"theme": "dark"})

    assert "theme" not in conf
