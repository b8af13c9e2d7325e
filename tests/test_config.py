import yaml
import pytest
from cairoaffine import config as config_module
from cairoaffine.config import Config, ConfigManager, getflag


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.strict_singular is False
        assert config.singular_tolerance == 1e-6

    def test_env_flag(self, monkeypatch):
        monkeypatch.setenv("CAIROAFFINE_STRICT", "1")
        assert Config().strict_singular is True
        monkeypatch.setenv("CAIROAFFINE_STRICT", "no")
        assert Config().strict_singular is False

    def test_getflag(self, monkeypatch):
        monkeypatch.delenv("SOME_FLAG", raising=False)
        assert getflag("SOME_FLAG") is False
        assert getflag("SOME_FLAG", default=True) is True
        monkeypatch.setenv("SOME_FLAG", "TRUE")
        assert getflag("SOME_FLAG") is True

    def test_changed_signal(self):
        config = Config()
        calls = []

        def on_changed(sender):
            calls.append(sender)

        config.changed.connect(on_changed)
        config.set_strict_singular(True)
        config.set_strict_singular(True)  # No change, no signal
        config.set_singular_tolerance(0.5)
        assert calls == [config, config]

    def test_negative_tolerance(self):
        with pytest.raises(ValueError):
            Config().set_singular_tolerance(-1)

    def test_dict_round_trip(self):
        config = Config()
        config.strict_singular = True
        config.singular_tolerance = 0.25
        restored = Config.from_dict(config.to_dict())
        assert restored.to_dict() == {
            "strict_singular": True,
            "singular_tolerance": 0.25,
        }

    def test_from_partial_dict(self):
        config = Config.from_dict({"singular_tolerance": "0.5"})
        assert config.strict_singular is False
        assert config.singular_tolerance == 0.5

    @pytest.mark.parametrize(
        "value, expected",
        [("false", False), ("False", False), ("0", False), ("true", True),
         ("1", True), (True, True), (False, False)],
    )
    def test_from_dict_parses_strict_flag(self, value, expected):
        config = Config.from_dict({"strict_singular": value})
        assert config.strict_singular is expected

    def test_from_dict_rejects_negative_tolerance(self):
        with pytest.raises(ValueError):
            Config.from_dict({"singular_tolerance": -0.5})

    def test_quoted_false_in_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('strict_singular: "false"\n')
        assert ConfigManager(path).config.strict_singular is False


class TestConfigManager:
    def test_missing_file_gives_defaults(self, tmp_path):
        mgr = ConfigManager(tmp_path / "config.yaml")
        assert mgr.config.to_dict() == Config().to_dict()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        mgr = ConfigManager(path)
        assert mgr.config.strict_singular is False

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "sub" / "config.yaml"
        mgr = ConfigManager(path)
        mgr.config.set_strict_singular(True)
        mgr.save()

        with open(path) as f:
            assert yaml.safe_load(f)["strict_singular"] is True

        assert ConfigManager(path).config.strict_singular is True


class TestInitializeConfig:
    def test_loads_once(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"strict_singular": True}))

        config = config_module.initialize_config(path)
        assert config.strict_singular is True
        assert config_module.get_config() is config

        # Later calls keep the already loaded config
        path.write_text(yaml.safe_dump({"strict_singular": False}))
        assert config_module.initialize_config(path) is config

    def test_default_before_initialization(self):
        assert config_module.config_mgr is None
        assert config_module.get_config().strict_singular is False
