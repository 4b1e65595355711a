# どこで: `src/ringline/interactive/gl/index_buffer.py`。
# 何を: PolylineBatch.offsets から GL_LINE_STRIP 用インデックス配列を生成する。
# なぜ: 複数リングを 1 draw call で描くためのインデックス生成を純粋関数として切り出すため。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from ringline.interactive.gl.line_mesh import LineMesh


def build_line_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets から GL_LINE_STRIP + primitive restart 用の uint32 インデックスを返す。

    Notes
    -----
    - 頂点数 2 未満のポリラインは描けないので飛ばす。
    - リングの頂点数が変わらない限り offsets も変わらないため、内容をキーに LRU キャッシュする。
    """
    offsets_i32 = np.asarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _build_cached(offsets_i32.tobytes())


@lru_cache(maxsize=32)
def _build_cached(offsets_bytes: bytes) -> np.ndarray:
    offsets = np.frombuffer(offsets_bytes, dtype=np.int32)
    out = _line_strip_indices(offsets, np.uint32(LineMesh.PRIMITIVE_RESTART_INDEX))
    out.setflags(write=False)
    return out


@njit(cache=True)  # type: ignore[misc]
def _line_strip_indices(offsets: np.ndarray, restart_index: np.uint32) -> np.ndarray:
    n = offsets.shape[0]
    total = 0
    count = 0
    for i in range(n - 1):
        length = offsets[i + 1] - offsets[i]
        if length >= 2:
            total += length
            count += 1

    if count == 0:
        return np.empty((0,), dtype=np.uint32)

    out = np.empty((total + count - 1,), dtype=np.uint32)
    cursor = 0
    for i in range(n - 1):
        start = offsets[i]
        length = offsets[i + 1] - start
        if length < 2:
            continue
        if cursor > 0:
            out[cursor] = restart_index
            cursor += 1
        for j in range(length):
            out[cursor] = start + j
            cursor += 1
    return out
