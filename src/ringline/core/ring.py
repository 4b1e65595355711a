"""
どこで: `src/ringline/core/ring.py`。円リングの点列生成。
何を: resolution と radius から、4 つの極点と象限内の補間点からなる閉じたリング点列を構築する。
なぜ: 極点を三角関数に頼らず厳密値で置き、角度刻みの丸め誤差が基準点へ波及しないようにするため。
"""

from __future__ import annotations

import math

import numpy as np

from ringline.core.ring_params import check_ring_shape

QUADRANT_DEG = 90.0


def extreme_point(index: int, radius: float) -> tuple[float, float]:
    """index 番目（0:東, 1:北, 2:西, 3:南）の極点を返す。

    偶数 index は X 軸上、奇数 index は Y 軸上に置き、index >= 2 で符号を反転する。
    """
    offset = -radius if index >= 2 else radius
    if index % 2 == 0:
        return (offset, 0.0)
    return (0.0, offset)


def generate_ring(resolution: int, radius: float) -> np.ndarray:
    """円を近似する閉じたリング点列（ローカル座標）を生成する。

    Parameters
    ----------
    resolution : int
        リングの頂点数（閉じ点を除く）。4 以上の 4 の倍数。
    radius : float
        半径。正の有限値。

    Returns
    -------
    np.ndarray
        float64 型 shape (resolution + 1, 2) の読み取り専用配列。
        東 → 北 → 西 → 南 の順に並び、末尾は先頭点の複製。

    Raises
    ------
    InvalidRingConfigError
        resolution が 4 の倍数でない場合。
    DegenerateRingInputError
        resolution < 4、または radius <= 0 の場合。

    Notes
    -----
    極点同士の間に `(resolution - 4) / 4` 個の補間点を置く。
    補間点の角度は象限の極点角から 1 刻みずつ積算し、象限の最後でもう 1 刻み進めて
    次の 90° 境界に到達させる。境界では角度を 90° の倍数へ置き直し、誤差を次の象限へ持ち越さない。
    """
    res, r = check_ring_shape(resolution, radius)

    n_between = (res - 4) // 4
    step_deg = QUADRANT_DEG / float(n_between + 1)

    points = np.empty((res + 1, 2), dtype=np.float64)
    cursor = 0
    theta = 0.0
    for quadrant in range(4):
        points[cursor] = extreme_point(quadrant, r)
        cursor += 1

        for _ in range(n_between):
            theta += step_deg
            rad = math.radians(theta)
            points[cursor, 0] = r * math.cos(rad)
            points[cursor, 1] = r * math.sin(rad)
            cursor += 1

        # 最後の補間点からもう 1 刻み進めると次の極点角になる。
        theta = QUADRANT_DEG * float(quadrant + 1)

    # 先頭点を終端に複製してポリラインを閉じる。
    points[cursor] = points[0]
    points.setflags(write=False)
    return points


__all__ = ["extreme_point", "generate_ring"]
