import textwrap

import pytest

from managers.config_manager import DEFAULT_CONFIG, ConfigManager
from models.enums import LayerPosition, TransitionMode
from models.errors import ConfigurationError
from models.schedule import IntervalBounds


def write(path, body: str):
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


class TestLoad:

    def test_bundled_config_loads(self):
        config = ConfigManager().load()

        assert len(config.surfaces) == 4
        assert [t.animation for t in config.texts] == ["scroll", "vertical", "blink"]
        assert config.transitions.mode is TransitionMode.RANDOM
        assert config.transitions.interval == IntervalBounds(2000, 10000)

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "absent.yaml")
        config = manager.load()

        assert [s.id for s in config.surfaces] == ["player-0", "player-1", "player-2", "player-3"]
        assert manager.data == DEFAULT_CONFIG

    def test_bad_yaml_falls_back_to_defaults(self, tmp_path):
        path = write(tmp_path / "config.yaml", "surfaces: [unclosed\n")

        config = ConfigManager(path).load()

        assert len(config.surfaces) == 4
        assert config.transitions.auto_mode is True

    def test_partial_file_is_merged(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            transitions:
              interval:
                max: 5000
              type: fixed
            display:
              fps: 30
        """)

        config = ConfigManager(path).load()

        assert config.transitions.interval == IntervalBounds(2000, 5000)
        assert config.transitions.mode is TransitionMode.FIXED
        assert config.transitions.auto_mode is True
        assert config.display.fps == 30
        assert config.display.width == 1920
        assert len(config.texts) == 3

    def test_surfaces_and_texts(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            surfaces:
              - {id: intro, title: Intro, url: "https://example.com/a.mp4"}
              - {title: Loop, active: false}
            texts:
              - content: HELLO
                animation: randomMove
                params: {speed: 2.5, color: "rgb(255, 0, 0)", fontSize: 60px, position: center}
        """)

        config = ConfigManager(path).load()

        assert [(s.id, s.title, s.active) for s in config.surfaces] == [("intro", "Intro", True), ("player-1", "Loop", False)]
        text = config.texts[0]
        assert text.content == "HELLO"
        assert text.animation == "randomMove"
        assert text.params.speed == 2.5
        assert text.params.color == "rgb(255, 0, 0)"
        assert text.params.font_size == "60px"
        assert text.params.position is LayerPosition.CENTER

    def test_includes(self, tmp_path):
        write(tmp_path / "surfaces.yaml", """
            surfaces:
              - {title: Only}
        """)
        write(tmp_path / "timing.yaml", """
            transitions:
              interval: {min: 3000, max: 4000}
              type: fixed
        """)
        path = write(tmp_path / "config.yaml", """
            include:
              - surfaces.yaml
              - timing.yaml
        """)

        config = ConfigManager(path).load()

        assert [s.title for s in config.surfaces] == ["Only"]
        assert config.transitions.interval == IntervalBounds(3000, 4000)


class TestValidate:

    def valid(self):
        return ConfigManager.merge_with_defaults({})

    def test_defaults_are_valid(self):
        assert ConfigManager.validate(self.valid()) == []

    @pytest.mark.parametrize("interval, fragment", [
        ({"min": 5000, "max": 4000}, "min must be less than max"),
        ({"min": 500, "max": 4000}, "at least 1000ms"),
        ({"min": "fast", "max": 4000}, "must be numbers"),
    ])
    def test_bad_interval(self, interval, fragment):
        data = self.valid()
        data["transitions"]["interval"] = interval

        errors = ConfigManager.validate(data)

        assert any(fragment in e for e in errors)

    def test_bad_text_params(self):
        data = self.valid()
        data["texts"][0]["params"]["speed"] = 42
        data["texts"][1]["params"]["color"] = "not a colour"

        errors = ConfigManager.validate(data)

        assert "Text 1: speed must be between 0 and 10" in errors
        assert "Text 2: 'not a colour' is not a CSS colour" in errors

    def test_unknown_mode_and_default(self):
        data = self.valid()
        data["transitions"]["type"] = "shuffle"
        data["transitions"]["default_transition"] = "wipe"

        errors = ConfigManager.validate(data)

        assert len(errors) == 2

    def test_no_surfaces(self):
        data = self.valid()
        data["surfaces"] = []
        assert ConfigManager.validate(data) == ["surfaces: at least one surface is required"]

    def test_invalid_file_falls_back(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            transitions:
              interval: {min: 9000, max: 3000}
        """)

        config = ConfigManager(path).load()

        assert config.transitions.interval == IntervalBounds(2000, 10000)


class TestSave:

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "out" / "config.yaml"
        manager = ConfigManager(path)
        config = manager.load()
        config.transitions.auto_mode = False
        config.transitions.interval = IntervalBounds(1500, 3500)
        config.texts[0].content = "LIVE"

        manager.save(config)
        reloaded = ConfigManager(path).load()

        assert reloaded.transitions.auto_mode is False
        assert reloaded.transitions.interval == IntervalBounds(1500, 3500)
        assert reloaded.texts[0].content == "LIVE"

    def test_save_before_load(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(tmp_path / "config.yaml").save()

    def test_reset_to_default(self, tmp_path):
        path = write(tmp_path / "config.yaml", "display: {fps: 24}\n")
        manager = ConfigManager(path)
        assert manager.load().display.fps == 24

        assert manager.reset_to_default().display.fps == 60
