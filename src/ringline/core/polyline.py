# どこで: `src/ringline/core/polyline.py`。
# 何を: ポリライン描画先のプロトコル、CPU 側の頂点バッファ実装、複数ポリラインを束ねる PolylineBatch を提供する。
# なぜ: リングの同期処理を GPU/ウィンドウから切り離し、ヘッドレスでも検証できるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np


class PolylineSink(Protocol):
    """連結線分として点列を描く描画先。"""

    def set_position_count(self, count: int) -> None:
        """描画する頂点数を設定する。"""
        ...

    def set_position(self, index: int, position: Sequence[float]) -> None:
        """index 番目の頂点位置（x, y, z）を設定する。"""
        ...


@dataclass(frozen=True, slots=True)
class PolylineBatch:
    """1 本以上のポリラインをまとめた不変の頂点配列。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 3) の頂点配列。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリライン開始インデックス配列。
    """

    coords: np.ndarray
    offsets: np.ndarray

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords)
        offsets = np.asarray(self.offsets)

        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError("coords は shape (N,3) の 2 次元配列である必要がある")
        if offsets.ndim != 1 or offsets.size == 0:
            raise ValueError("offsets は 1 要素以上の 1 次元配列である必要がある")
        if offsets[0] != 0 or offsets[-1] != coords.shape[0]:
            raise ValueError("offsets は 0 で始まり coords 行数で終わる必要がある")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        coords = coords.astype(np.float32, copy=True)
        offsets = offsets.astype(np.int32, copy=True)
        coords.setflags(write=False)
        offsets.setflags(write=False)
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)

    @property
    def n_polylines(self) -> int:
        return int(self.offsets.size - 1)


def concat_polylines(*batches: PolylineBatch) -> PolylineBatch:
    """複数の PolylineBatch を 1 つに連結する。"""
    if not batches:
        return PolylineBatch(
            coords=np.zeros((0, 3), dtype=np.float32),
            offsets=np.zeros((1,), dtype=np.int32),
        )

    coords = np.concatenate([b.coords for b in batches], axis=0)
    offsets: list[int] = [0]
    base = 0
    for b in batches:
        # 先頭 0 を除いた分だけシフトして足し込む。
        offsets.extend((b.offsets[1:] + base).tolist())
        base += int(b.offsets[-1])
    return PolylineBatch(coords=coords, offsets=np.asarray(offsets, dtype=np.int32))


class PolylineBuffer:
    """PolylineSink の CPU 側実装。

    書き込みのたびに `version` が進むため、利用側は前回と比較して再転送の要否を決められる。
    """

    def __init__(self) -> None:
        self._positions = np.zeros((0, 3), dtype=np.float64)
        self._version = 0

    @property
    def position_count(self) -> int:
        return int(self._positions.shape[0])

    @property
    def version(self) -> int:
        return self._version

    def set_position_count(self, count: int) -> None:
        n = int(count)
        if n < 0:
            raise ValueError(f"count は 0 以上である必要がある: got={count!r}")
        if n == self._positions.shape[0]:
            return
        resized = np.zeros((n, 3), dtype=np.float64)
        keep = min(n, self._positions.shape[0])
        resized[:keep] = self._positions[:keep]
        self._positions = resized
        self._version += 1

    def set_position(self, index: int, position: Sequence[float]) -> None:
        i = int(index)
        if not (0 <= i < self._positions.shape[0]):
            raise IndexError(f"index が範囲外: index={index}, count={self._positions.shape[0]}")
        self._positions[i] = position
        self._version += 1

    def positions(self) -> np.ndarray:
        """現在の頂点配列のコピー（float64, shape (N,3)）を返す。"""
        return self._positions.copy()

    def snapshot(self) -> PolylineBatch:
        """現在の内容を 1 本のポリラインとして返す。"""
        n = self._positions.shape[0]
        return PolylineBatch(coords=self._positions, offsets=np.array([0, n], dtype=np.int32))


__all__ = ["PolylineBatch", "PolylineBuffer", "PolylineSink", "concat_polylines"]
