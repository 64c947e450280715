"""
Tests for the calendar configuration.
"""

import json

from cosmic_calendar.calendar_config import CONFIG_ENV_VAR, CalendarConfig


def test_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = CalendarConfig()

    assert config.plot_width == 880
    assert config.plot_height == 200
    assert config.scale_extent == (0.1, 50.0)
    assert config.animation_durations == {'enter': 750, 'update': 750, 'exit': 500, 'hover': 200}
    assert config.data_file is None
    assert config.log_level == 'INFO'


def test_file_overrides_per_key(tmp_path):
    config_file = tmp_path / 'calendar.json'
    config_file.write_text(json.dumps({
        'animation': {'enter_ms': 100},
        'logging': {'log_level': 'debug'},
        'unknown': {'x': 1},
    }), encoding='utf-8')

    config = CalendarConfig(str(config_file))

    assert config.animation_durations['enter'] == 100
    assert config.animation_durations['exit'] == 500
    assert config.log_level == 'DEBUG'
    assert 'unknown' not in config.config
    assert CalendarConfig.DEFAULT_CONFIG['animation']['enter_ms'] == 750


def test_environment_variable(tmp_path, monkeypatch):
    config_file = tmp_path / 'calendar.json'
    config_file.write_text(json.dumps({'data': {'data_file': '/tmp/events.json'}}), encoding='utf-8')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

    assert CalendarConfig().data_file == '/tmp/events.json'


def test_bad_files_keep_defaults(tmp_path):
    broken = tmp_path / 'broken.json'
    broken.write_text('{not json', encoding='utf-8')
    listing = tmp_path / 'list.json'
    listing.write_text('[1, 2]', encoding='utf-8')

    for path in (broken, listing, tmp_path / 'missing.json'):
        config = CalendarConfig(str(path))
        assert config.plot_width == 880
