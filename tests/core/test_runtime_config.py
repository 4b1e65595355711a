from pathlib import Path

import pytest

from ringline.core.runtime_config import runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.circle_resolution == 4
    assert cfg.circle_radius == 5.0
    assert cfg.window_position == (25, 25)
    assert cfg.canvas_size == (800, 800)
    assert cfg.fps == 60.0
    assert cfg.background_color == (1.0, 1.0, 1.0)
    assert cfg.line_color == (0.0, 0.0, 0.0)
    assert cfg.line_thickness == pytest.approx(0.002)


def test_discovered_config_overrides_section_keys(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".ringline" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("circle:\n  resolution: 64\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.circle_resolution == 64
    # 同じセクションの未指定キーは同梱既定値のまま。
    assert cfg.circle_radius == 5.0


def test_explicit_config_overrides_discovered_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".ringline" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("circle:\n  radius: 2.0\nrender:\n  fps: 30\n", encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("circle:\n  radius: 9.5\n", encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.circle_radius == 9.5
    assert cfg.fps == 30.0


def test_home_config_is_discovered(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    home_cfg = tmp_path / ".config" / "ringline" / "config.yaml"
    home_cfg.parent.mkdir(parents=True, exist_ok=True)
    home_cfg.write_text("ui:\n  canvas_size: [300, 200]\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == home_cfg
    assert cfg.canvas_size == (300, 200)


def test_config_is_cached_until_path_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert runtime_config() is runtime_config()

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("render:\n  fps: 24\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config().fps == 24.0


def test_missing_explicit_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "circle: 3\n",
        "ui:\n  canvas_size: [1, 2, 3]\n",
        "render:\n  line_color: red\n",
        "circle:\n  resolution: many\n",
        "- just\n- a list\n",
        "circle: [unclosed\n",
    ],
)
def test_malformed_config_raises_runtime_error(text: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "bad.yaml"
    explicit.write_text(text, encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(RuntimeError):
        runtime_config()


def test_non_positive_line_thickness_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "thin.yaml"
    explicit.write_text("render:\n  line_thickness: 0\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(ValueError):
        runtime_config()
