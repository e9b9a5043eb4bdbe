"""Tests for the CLI entry point and frame output."""

from PIL import Image

from conftest import ScriptedConsole
from weatherscene import main as main_mod
from weatherscene.main import confirm_start, main, welcome
from weatherscene.output.frame_file import FrameFileSink


class TestConfirmStart:
    def test_yes(self):
        assert confirm_start(ScriptedConsole(["Y"])) is True

    def test_no(self):
        assert confirm_start(ScriptedConsole(["n"])) is False

    def test_reasks_until_valid(self):
        console = ScriptedConsole(["maybe", "", "y"])
        assert confirm_start(console) is True
        assert console.output().count("Invalid input") == 2

    def test_closed_input_means_no(self):
        console = ScriptedConsole()
        console.close()
        assert confirm_start(console) is False


def test_welcome_lists_special_cities():
    console = ScriptedConsole()
    welcome(console)
    assert "Kyoto, Tokyo, London, Madrid, Nashville, New York" in console.output()


def test_missing_api_key_exits_early(monkeypatch, capsys):
    monkeypatch.setattr(main_mod, "load_dotenv", lambda: False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    assert main([]) == 2
    assert "API_KEY must be set" in capsys.readouterr().err


class TestFrameFileSink:
    def test_writes_and_replaces(self, tmp_path):
        sink = FrameFileSink(tmp_path / "out" / "scene.png")
        sink.send(Image.new("RGBA", (4, 2), (255, 0, 0, 255)))
        sink.send(Image.new("RGBA", (4, 2), (0, 0, 255, 255)))
        assert sink.frames_written == 2
        with Image.open(sink.path) as im:
            assert im.size == (4, 2)
            assert im.convert("RGBA").getpixel((0, 0)) == (0, 0, 255, 255)
        assert [p.name for p in sink.path.parent.iterdir()] == ["scene.png"]

    def test_jpeg_drops_alpha(self, tmp_path):
        sink = FrameFileSink(tmp_path / "scene.jpg")
        sink.send(Image.new("RGBA", (4, 2), (0, 0, 0, 255)))
        with Image.open(sink.path) as im:
            assert im.format == "JPEG"
