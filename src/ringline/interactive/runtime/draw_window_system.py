# どこで: `src/ringline/interactive/runtime/draw_window_system.py`。
# 何を: `update(t)` とリング群の tick を毎フレーム実行し、描画ウィンドウへ描くサブシステムを提供する。
# なぜ: `ringline.api.run()` を「配線」に寄せ、フレーム処理の責務を独立させるため。

from __future__ import annotations

import logging
from typing import Callable, Sequence

from ringline.core.circle_line import CircleLine
from ringline.interactive.draw_window import create_draw_window
from ringline.interactive.gl.draw_renderer import DrawRenderer
from ringline.interactive.render_settings import RenderSettings
from ringline.interactive.runtime.circle_scene import CircleScene
from ringline.interactive.runtime.frame_clock import make_frame_clock

_logger = logging.getLogger(__name__)


class DrawWindowSystem:
    """描画ウィンドウのサブシステム。"""

    def __init__(
        self,
        circles: Sequence[CircleLine],
        *,
        update: Callable[[float], None] | None,
        settings: RenderSettings,
        fixed_step_fps: float | None = None,
    ) -> None:
        self._settings = settings
        self._update = update
        self._scene = CircleScene(circles)
        self._clock = make_frame_clock(fixed_step_fps)

        self.window = create_draw_window(settings)
        self._renderer = DrawRenderer(self.window, settings)
        self.window.push_handlers(on_draw=self.draw_frame)

        self._frames = 0
        self._uploads = 0

    def step(self) -> None:
        """`update(t)` を呼んでからリングを進め、変化があれば GPU へ転送する。"""

        upload = self._scene.advance(self._clock, self._update)
        self._frames += 1
        if upload is None:
            return
        self._renderer.upload(upload.batch, upload.indices)
        self._uploads += 1
        _logger.debug(
            "frame=%d: %d 本のリング（%d 頂点）を転送",
            self._frames,
            upload.batch.n_polylines,
            upload.batch.coords.shape[0],
        )

    def draw_frame(self) -> None:
        """転送済みのリングを描く（`flip()` は pyglet が行う）。"""

        settings = self._settings
        w, h = self.window.get_framebuffer_size()
        self._renderer.viewport(w, h)
        self._renderer.clear(settings.background_color)
        self._renderer.draw(color=settings.line_color, thickness=settings.line_thickness)

    def close(self) -> None:
        """GPU リソースとウィンドウを解放する。"""

        _logger.info("frames=%d uploads=%d", self._frames, self._uploads)
        self._renderer.release()
        self.window.close()
