"""Tests for lenient settings loading."""

from pathlib import Path

from storyof.config import load_settings, settings_template_path


def test_missing_settings_file(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "settings.json") == {}


def test_malformed_settings_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == {}


def test_non_object_settings_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == {}


def test_template_path_from_settings(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"templatePath": "  /srv/storyof/template.html "}', encoding="utf-8")

    settings = load_settings(path)

    assert settings_template_path(settings) == Path("/srv/storyof/template.html")
    assert settings_template_path({}) is None
    assert settings_template_path({"templatePath": 3}) is None
