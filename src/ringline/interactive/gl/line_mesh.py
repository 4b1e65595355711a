"""
どこで: `src/ringline/interactive/gl/line_mesh.py`。
何を: リング頂点用の VBO/IBO/VAO を保持し、内容が変わったときだけ転送する LineMesh を提供する。
なぜ: バッファ再確保と VAO の張り直しを 1 箇所にまとめ、Renderer を描画命令だけに保つため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """GL_LINE_STRIP 描画用の GPU バッファ一式。"""

    # ポリライン間の区切りに使うインデックス値。
    PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

    def __init__(self, ctx: Any, program: Any, initial_reserve: int = 64 * 1024) -> None:
        """
        ctx: moderngl のコンテキスト
        program: `in_vert`（vec3）を入力に持つシェーダープログラム
        initial_reserve: VBO/IBO の初期確保バイト数。足りなければ倍々で拡張する
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.ctx.primitive_restart = True  # type: ignore[attr-defined]
        self.ctx.primitive_restart_index = self.PRIMITIVE_RESTART_INDEX  # type: ignore[attr-defined]

    def _build_vao(self) -> Any:
        return self.ctx.simple_vertex_array(
            self.program, self.vbo, "in_vert", index_buffer=self.ibo
        )

    def _grow(self, buffer: Any, required: int) -> tuple[Any, bool]:
        if required <= buffer.size:
            return buffer, False
        size = max(int(buffer.size), self.initial_reserve)
        while size < required:
            size *= 2
        buffer.release()
        return self.ctx.buffer(reserve=size, dynamic=True), True

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """頂点とインデックスを GPU へ書き込む。"""
        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)

        self.vbo, vbo_grown = self._grow(self.vbo, vertices_f32.nbytes)
        self.ibo, ibo_grown = self._grow(self.ibo, indices_u32.nbytes)
        if vbo_grown or ibo_grown:
            # バッファを差し替えたときだけ VAO を作り直す。
            self.vao.release()
            self.vao = self._build_vao()

        self.vbo.orphan()
        self.vbo.write(vertices_f32)
        self.ibo.orphan()
        self.ibo.write(indices_u32)
        self.index_count = int(indices_u32.size)

    def release(self) -> None:
        """GPU メモリを解放する。"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()
