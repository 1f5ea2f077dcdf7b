"""
Tests for .autocommitrc loading and validation.

Run with:
    pytest tests/test_config.py -v
"""

import json

import pytest

from autocommit.config import DEFAULT_KEYS, Config, ConfigManager


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Empty cwd and a separate fake home directory."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr("pathlib.Path.home", lambda: fake_home)
    return fake_home


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.mode == "staged"
        assert config.show_notifications is True
        assert config.max_subject_length == 50
        assert config.border == "round"
        assert (config.width, config.height, config.preview_width) == (0.8, 0.8, 0.5)
        assert config.message_height == 12
        assert config.keys == DEFAULT_KEYS

    def test_default_keys_are_a_copy(self):
        config = Config()
        config.keys["quit"] = "x"
        assert DEFAULT_KEYS["quit"] == "q"
        assert Config().keys["quit"] == "q"

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"mode": "select", "provider": "claude"})
        assert config.mode == "select"
        assert not hasattr(config, "provider")

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    @pytest.mark.parametrize("field, value", [
        ("mode", "interactive"),
        ("border", "dotted"),
        ("show_notifications", "yes"),
        ("max_subject_length", -1),
        ("max_subject_length", True),
        ("message_height", 0),
        ("width", 1.5),
        ("height", 0),
        ("preview_width", 1),
        ("preview_width", "half"),
    ])
    def test_validate_resets_invalid_values(self, field, value):
        config = Config(**{field: value})
        warnings = config.validate()
        assert len(warnings) == 1
        assert field in warnings[0]
        assert getattr(config, field) == getattr(Config(), field)

    def test_validate_accepts_full_size(self):
        config = Config(width=1, height=1.0)
        assert config.validate() == []

    def test_keys_merge_over_defaults(self):
        config = Config(keys={"commit": "c"})
        assert config.validate() == []
        assert config.keys == {**DEFAULT_KEYS, "commit": "c"}

    def test_unknown_key_action_is_dropped(self):
        config = Config(keys={"push": "p", "quit": "x"})
        warnings = config.validate()
        assert warnings == ["Unknown key action 'push' ignored"]
        assert "push" not in config.keys
        assert config.keys["quit"] == "x"

    def test_empty_key_falls_back(self):
        config = Config(keys={"edit": ""})
        warnings = config.validate()
        assert warnings == ["Invalid key for 'edit', using 'e'"]
        assert config.keys["edit"] == "e"

    def test_keys_not_an_object(self):
        config = Config(keys=["q"])
        assert config.validate() == ["Invalid keys, using defaults"]
        assert config.keys == DEFAULT_KEYS

    def test_from_dict_triggers_validation(self, capsys):
        config = Config.from_dict({"border": "invalid"})
        err = capsys.readouterr().err
        assert "Config warning: Invalid border 'invalid'" in err
        assert config.border == "round"


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, home):
        manager = ConfigManager()
        assert manager.load() == Config()
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, home, tmp_path):
        local = tmp_path / "work" / ".autocommitrc"
        local.write_text(json.dumps({"mode": "select", "keys": {"commit": "c"}}))

        manager = ConfigManager()
        config = manager.load()
        assert config.mode == "select"
        assert config.keys["commit"] == "c"
        assert config.keys["quit"] == "q"
        assert manager.get_config_path() == local

    def test_local_file_wins_over_home(self, home, tmp_path):
        (home / ".autocommitrc").write_text(json.dumps({"border": "heavy"}))
        (tmp_path / "work" / ".autocommitrc").write_text(json.dumps({"border": "ascii"}))
        assert ConfigManager().load().border == "ascii"

    def test_falls_back_to_home(self, home):
        (home / ".autocommitrc").write_text(json.dumps({"border": "heavy"}))
        manager = ConfigManager()
        assert manager.load().border == "heavy"
        assert manager.get_config_path() == home / ".autocommitrc"

    def test_load_is_cached(self, home):
        manager = ConfigManager()
        first = manager.load()
        (home / ".autocommitrc").write_text(json.dumps({"mode": "select"}))
        assert manager.load() is first

    def test_save_and_load_roundtrip(self, home):
        manager = ConfigManager()
        path = manager.save(Config(mode="select", border="double"), global_config=True)
        assert path == home / ".autocommitrc"

        loaded = ConfigManager().load()
        assert loaded.mode == "select"
        assert loaded.border == "double"

    def test_save_local(self, home, tmp_path):
        path = ConfigManager().save(Config(), global_config=False)
        assert path == tmp_path / "work" / ".autocommitrc"
        assert json.loads(path.read_text())["mode"] == "staged"

    @pytest.mark.parametrize("content", ["not valid json {{{", "[1, 2, 3]", '"select"'])
    def test_malformed_file_returns_defaults(self, home, tmp_path, capsys, content):
        (tmp_path / "work" / ".autocommitrc").write_text(content)
        config = ConfigManager().load()
        assert config == Config()
        assert "Warning: Could not load" in capsys.readouterr().err
