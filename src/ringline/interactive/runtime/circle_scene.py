# どこで: `src/ringline/interactive/runtime/circle_scene.py`。
# 何を: 複数の CircleLine を 1 フレーム進め、描画先バッファが変わったときだけ転送用データを組み立てる。
# なぜ: 変化のないフレームで GPU 転送とインデックス生成を省くため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from ringline.core.circle_line import CircleLine
from ringline.core.polyline import PolylineBatch, PolylineBuffer, concat_polylines
from ringline.interactive.gl.index_buffer import build_line_indices
from ringline.interactive.runtime.frame_clock import FrameClock


@dataclass(frozen=True, slots=True)
class SceneUpload:
    """このフレームで GPU へ転送すべき内容。"""

    batch: PolylineBatch
    indices: np.ndarray


class CircleScene:
    """PolylineBuffer を描画先に持つ CircleLine 群をまとめて更新する。"""

    def __init__(self, circles: Sequence[CircleLine]) -> None:
        buffers: list[PolylineBuffer] = []
        for c in circles:
            sink = c.sink
            if not isinstance(sink, PolylineBuffer):
                raise TypeError(
                    f"CircleScene の CircleLine は PolylineBuffer を描画先に持つ必要がある: got={type(sink).__name__}"
                )
            buffers.append(sink)
        self._circles = list(circles)
        self._buffers = buffers
        self._last_versions: tuple[int, ...] | None = None

    @property
    def circles(self) -> list[CircleLine]:
        return list(self._circles)

    def step(self) -> SceneUpload | None:
        """全リングを tick し、バッファが更新されていれば転送内容を返す。"""
        for c in self._circles:
            c.tick()

        versions = tuple(b.version for b in self._buffers)
        if versions == self._last_versions:
            return None
        self._last_versions = versions

        batch = concat_polylines(*(b.snapshot() for b in self._buffers))
        return SceneUpload(batch=batch, indices=build_line_indices(batch.offsets))

    def advance(self, clock: FrameClock, update: Callable[[float], None] | None) -> SceneUpload | None:
        """`update(clock.t())` を呼んでから `step()` し、最後に時計を 1 フレーム進める。"""
        if update is not None:
            update(clock.t())
        upload = self.step()
        clock.tick()
        return upload
