import logging

import pytest

from task_insights.config import DEFAULT_SETTINGS, EngineSettings, load_settings


def test_defaults():
    assert DEFAULT_SETTINGS == EngineSettings()
    assert DEFAULT_SETTINGS.default_period == "week"
    assert DEFAULT_SETTINGS.recommendation_limit == 5


def test_load_settings_overrides(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("default_period: month\nrecommendation_limit: '2'\n", encoding="utf-8")

    settings = load_settings(path)

    assert settings.default_period == "month"
    assert settings.recommendation_limit == 2
    assert settings.narrative_limit == DEFAULT_SETTINGS.narrative_limit


def test_empty_file_keeps_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_unknown_key_is_ignored(tmp_path, caplog):
    path = tmp_path / "settings.yaml"
    path.write_text("colour: blue\nexport_indent: 4\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)

    assert settings.export_indent == 4
    assert "colour" in caplog.text


def test_non_mapping_document_is_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- week\n- month\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(path)


def test_invalid_integer_is_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("peak_hour_count: many\n", encoding="utf-8")
    with pytest.raises(ValueError, match="peak_hour_count"):
        load_settings(path)


def test_round_trip_through_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(EngineSettings(narrative_limit=1).to_yaml(), encoding="utf-8")
    assert load_settings(path).narrative_limit == 1
