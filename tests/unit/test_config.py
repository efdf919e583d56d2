from __future__ import annotations

from pathlib import Path

import pytest

from strarray.config import StrArrayConfig, load_config, parse_config


def _write(path: Path, body: str) -> None:
    path.write_text(body.strip() + "\n", encoding="utf-8")


def test_defaults_without_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STRARRAY_CONFIG", raising=False)

    config = load_config(cwd=tmp_path)

    assert config == StrArrayConfig()
    assert config.line_width == 72
    assert config.join == "newline"


def test_config_file_in_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STRARRAY_CONFIG", raising=False)
    _write(
        tmp_path / ".strarray.yaml",
        """
line_width: 40
join: space
sort_order: decreasing
keep_blank_lines: false
""",
    )

    config = load_config(cwd=tmp_path)

    assert config == StrArrayConfig(line_width=40, join="space", sort_order="decreasing", keep_blank_lines=False)


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "custom.yaml"
    _write(config_path, "line_width: 20")
    monkeypatch.setenv("STRARRAY_CONFIG", str(config_path))

    assert load_config(cwd=tmp_path / "elsewhere").line_width == 20


def test_empty_config_file_means_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == StrArrayConfig()


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config file not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"line_width": 0}, "line_width"),
        ({"line_width": "wide"}, "line_width"),
        ({"join": "tab"}, "join"),
        ({"sort_order": "random"}, "sort_order"),
        ({"keep_blank_lines": "yes"}, "keep_blank_lines"),
        ({"colour": "blue"}, "Unknown config keys: colour"),
    ],
)
def test_invalid_values_are_rejected(data: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_config(data)


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yaml"
    _write(config_path, "- a\n- b")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(config_path)


def test_malformed_yaml_is_reported_as_value_error(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.yaml"
    _write(config_path, "line_width: [1,")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(config_path)
