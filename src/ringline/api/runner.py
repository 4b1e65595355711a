"""
どこで: `src/ringline/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL を使い、CircleLine 群を毎フレーム更新してウィンドウに描画する。
なぜ: `main.py` を実行して実際にリングの追従をプレビューできる経路を用意するため。
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pyglet

from ringline.core.circle_line import CircleLine
from ringline.core.runtime_config import runtime_config, set_config_path
from ringline.interactive.render_settings import RenderSettings
from ringline.interactive.runtime.draw_window_system import DrawWindowSystem


def run(
    update: Callable[[float], None] | None,
    circles: Sequence[CircleLine],
    *,
    background_color: tuple[float, float, float] | None = None,
    line_thickness: float | None = None,
    line_color: tuple[float, float, float] | None = None,
    canvas_size: tuple[int, int] | None = None,
    fps: float | None = None,
    fixed_step_fps: float | None = None,
    config_path: str | Path | None = None,
) -> None:
    """pyglet ウィンドウを生成し、リング群をリアルタイム描画する。

    Parameters
    ----------
    update : Callable[[float], None] | None
        フレーム経過秒 t を受け取り、リングの変換や設定を書き換えるコールバック。
    circles : Sequence[CircleLine]
        描画するリング。描画先は PolylineBuffer である必要がある（`ringline.api.circle` 参照）。
    background_color, line_thickness, line_color, canvas_size, fps
        None の場合は runtime config の値を使う。
    fixed_step_fps : float | None
        指定すると t を実時間ではなく `frame / fixed_step_fps` で進める。
    config_path : str | Path | None
        明示 config.yaml のパス。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    base = RenderSettings.from_runtime_config(runtime_config())
    settings = RenderSettings(
        background_color=base.background_color if background_color is None else background_color,
        line_thickness=base.line_thickness if line_thickness is None else float(line_thickness),
        line_color=base.line_color if line_color is None else line_color,
        canvas_size=base.canvas_size if canvas_size is None else canvas_size,
        window_position=base.window_position,
        fps=base.fps if fps is None else float(fps),
    )

    system = DrawWindowSystem(circles, update=update, settings=settings, fixed_step_fps=fixed_step_fps)

    def step(_dt: float) -> None:
        system.step()

    # fps<=0 は「スロットリング無し（可能な限り回す）」として扱う。
    if settings.fps <= 0:
        pyglet.clock.schedule(step)
    else:
        pyglet.clock.schedule_interval(step, 1.0 / float(settings.fps))

    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(step)
        system.close()
