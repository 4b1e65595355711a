# どこで: `src/ringline/interactive/gl/draw_renderer.py`。
# 何を: プレビュー用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送をウィンドウ処理から分離するため。

from __future__ import annotations

import moderngl
import numpy as np
from pyglet.window import Window

from ringline.core.polyline import PolylineBatch
from ringline.interactive.gl import utils as render_utils
from ringline.interactive.gl.line_mesh import LineMesh
from ringline.interactive.gl.shader import Shader
from ringline.interactive.render_settings import RenderSettings


class DrawRenderer:
    """リング群を 1 つの LineMesh で描くレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)
        self._mesh = LineMesh(self.ctx, self.program)
        canvas_w, canvas_h = settings.canvas_size
        # 射影行列はキャンバス寸法にのみ依存するため初期化時に一度設定する。
        projection = render_utils.build_projection(float(canvas_w), float(canvas_h))
        self.program["projection"].write(projection.tobytes())

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def upload(self, batch: PolylineBatch, indices: np.ndarray) -> None:
        """頂点とインデックスを転送する（変化があったフレームだけ呼ぶ）。"""
        self._mesh.upload(vertices=batch.coords, indices=indices)

    def draw(self, *, color: tuple[float, float, float], thickness: float) -> None:
        """転送済みのメッシュを描画する。"""
        if self._mesh.index_count == 0:
            return
        self.program["line_thickness"].value = float(thickness)
        self.program["color"].value = (*color, 1.0)
        self._mesh.vao.render(mode=self.ctx.LINE_STRIP, vertices=self._mesh.index_count)

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._mesh.release()
        self.program.release()
        self.ctx.release()
