# どこで: `src/ringline/interactive/render_settings.py`。
# 何を: プレビュー描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数と runtime config を 1 つの値にまとめて受け渡すため。

from __future__ import annotations

from dataclasses import dataclass

from ringline.core.runtime_config import RuntimeConfig


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    background_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    line_thickness: float = 0.002
    line_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    canvas_size: tuple[int, int] = (800, 800)
    window_position: tuple[int, int] = (25, 25)
    fps: float = 60.0

    @classmethod
    def from_runtime_config(cls, cfg: RuntimeConfig) -> RenderSettings:
        """RuntimeConfig の描画関連値から RenderSettings を作る。"""
        return cls(
            background_color=cfg.background_color,
            line_thickness=cfg.line_thickness,
            line_color=cfg.line_color,
            canvas_size=cfg.canvas_size,
            window_position=cfg.window_position,
            fps=cfg.fps,
        )
