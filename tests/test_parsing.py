"""Tests for reading raw LLM text into layout payloads."""

import pytest
from pydantic import ValidationError

from tilesmith.parsing import (
    LayoutParseError,
    describe_validation_error,
    parse_json_object,
    strip_code_fences,
)
from tilesmith.schemas import TerrainRegion


def test_strip_code_fences_variants():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_json_object_accepts_fenced_output():
    text = '```json\n{"regions": [], "description": "empty"}\n```'
    assert parse_json_object(text) == {"regions": [], "description": "empty"}


def test_parse_json_object_rejects_invalid_json(monkeypatch, capsys):
    monkeypatch.setenv("TILESMITH_NO_COLOR", "1")

    with pytest.raises(LayoutParseError) as exc_info:
        parse_json_object("Here is your layout: {regions: ...}")

    assert "not valid JSON" in str(exc_info.value)
    assert exc_info.value.raw_text == "Here is your layout: {regions: ...}"
    assert "[!] Failed to parse LLM response" in capsys.readouterr().out


def test_parse_json_object_rejects_non_objects():
    with pytest.raises(LayoutParseError, match="got list"):
        parse_json_object("[1, 2, 3]")


def test_layout_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_json_object("")


def test_describe_validation_error_lists_each_issue():
    with pytest.raises(ValidationError) as exc_info:
        TerrainRegion.model_validate({"terrain": "", "x": "left", "y": 0, "width": 0, "height": 6})

    issues = describe_validation_error(exc_info.value)

    assert len(issues) == 3
    assert any(issue.startswith("terrain:") and "received=''" in issue for issue in issues)
    assert any(issue.startswith("x:") and "received='left'" in issue for issue in issues)
    assert any(issue.startswith("width:") and "[type=greater_than]" in issue for issue in issues)


def test_describe_validation_error_truncates_long_values():
    with pytest.raises(ValidationError) as exc_info:
        TerrainRegion.model_validate({"terrain": "forest", "x": "x" * 200, "y": 0, "width": 6, "height": 6})

    (issue,) = describe_validation_error(exc_info.value)
    preview = issue.split("received=", 1)[1]
    assert preview.endswith("...")
    assert len(preview) == 80
