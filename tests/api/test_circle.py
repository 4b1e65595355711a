from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from ringline.api import circle
from ringline.core.polyline import PolylineBuffer
from ringline.core.runtime_config import set_config_path
from ringline.core.transform import TrackedTransform


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def test_circle_uses_config_defaults() -> None:
    line = circle()
    assert line.resolution == 4
    assert line.radius == 5.0
    assert isinstance(line.sink, PolylineBuffer)


def test_circle_defaults_follow_discovered_config(tmp_path: Path) -> None:
    cfg = tmp_path / ".ringline" / "config.yaml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("circle:\n  resolution: 16\n  radius: 1.5\n", encoding="utf-8")

    line = circle()
    assert (line.resolution, line.radius) == (16, 1.5)


def test_circle_explicit_values_and_transform() -> None:
    parent = TrackedTransform(position=(10.0, 0.0, 0.0))
    line = circle(resolution=8, radius=2.0, position=(0.0, 1.0, 0.0), parent=parent)
    line.tick()

    sink = line.sink
    assert isinstance(sink, PolylineBuffer)
    assert sink.position_count == 9
    np.testing.assert_allclose(sink.positions()[0], [12.0, 1.0, 0.0], rtol=0.0, atol=1e-12)
    assert line.transform.parent is parent
