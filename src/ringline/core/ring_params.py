# どこで: `src/ringline/core/ring_params.py`。
# 何を: リング生成パラメータ（resolution / radius）の宣言レンジ・既定値・検証とエラー型を提供する。
# なぜ: 生成関数とコンポーネントで同じ検証規則と例外階層を共有するため。

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any

RESOLUTION_MIN = 4
RESOLUTION_MAX = 500
RESOLUTION_STEP = 4
RADIUS_MIN = 0.0001
RADIUS_MAX = 100.0

DEFAULT_RESOLUTION = 4
DEFAULT_RADIUS = 5.0


class RingParamsError(ValueError):
    """リング生成パラメータが不正であることを表す基底例外。"""


class InvalidRingConfigError(RingParamsError):
    """resolution が 4 の倍数でない、または宣言レンジ外であることを表す。"""


class DegenerateRingInputError(RingParamsError):
    """radius <= 0 や resolution < 4 など、円として成立しない入力を表す。"""


@dataclass(frozen=True, slots=True)
class RingParams:
    """検証済みのリング生成パラメータ。"""

    resolution: int = DEFAULT_RESOLUTION
    radius: float = DEFAULT_RADIUS


def _as_resolution(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidRingConfigError(f"resolution は整数である必要がある: got={value!r}")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise InvalidRingConfigError(f"resolution は整数である必要がある: got={value!r}") from exc


def _as_radius(value: Any) -> float:
    try:
        radius = float(value)
    except (TypeError, ValueError) as exc:
        raise DegenerateRingInputError(f"radius は数値である必要がある: got={value!r}") from exc
    if not math.isfinite(radius) or radius <= 0.0:
        raise DegenerateRingInputError(f"radius は正の有限値である必要がある: got={value!r}")
    return radius


def check_ring_shape(resolution: Any, radius: Any) -> tuple[int, float]:
    """生成アルゴリズムが成立するための構造的な前提だけを検証する。

    Returns
    -------
    tuple[int, float]
        正規化した (resolution, radius)。

    Raises
    ------
    DegenerateRingInputError
        resolution < 4、または radius が正の有限値でない場合。
    InvalidRingConfigError
        resolution が整数でない、または 4 の倍数でない場合。
    """
    res = _as_resolution(resolution)
    if res < RESOLUTION_MIN:
        raise DegenerateRingInputError(
            f"resolution は {RESOLUTION_MIN} 以上である必要がある: got={res}"
        )
    if res % RESOLUTION_STEP != 0:
        raise InvalidRingConfigError(
            f"resolution は {RESOLUTION_STEP} の倍数である必要がある: got={res}"
        )
    return res, _as_radius(radius)


def validate_ring_params(resolution: Any, radius: Any) -> RingParams:
    """宣言レンジも含めてパラメータを検証し、RingParams を返す。

    Notes
    -----
    レンジ外の値は UI 上のヒントではなく前提条件違反として扱う。
    """
    res, r = check_ring_shape(resolution, radius)
    if res > RESOLUTION_MAX:
        raise InvalidRingConfigError(
            f"resolution は [{RESOLUTION_MIN}, {RESOLUTION_MAX}] の範囲である必要がある: got={res}"
        )
    if not (RADIUS_MIN <= r <= RADIUS_MAX):
        raise InvalidRingConfigError(
            f"radius は [{RADIUS_MIN}, {RADIUS_MAX}] の範囲である必要がある: got={r}"
        )
    return RingParams(resolution=res, radius=r)


__all__ = [
    "DEFAULT_RADIUS",
    "DEFAULT_RESOLUTION",
    "DegenerateRingInputError",
    "InvalidRingConfigError",
    "RADIUS_MAX",
    "RADIUS_MIN",
    "RESOLUTION_MAX",
    "RESOLUTION_MIN",
    "RingParams",
    "RingParamsError",
    "check_ring_shape",
    "validate_ring_params",
]
