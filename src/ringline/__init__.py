# どこで: `src/ringline/__init__.py`。
# 何を: ルート `ringline` パッケージを定義し、主要な型と API を再エクスポートする。
# なぜ: import 起点を `ringline` に統一するため。

from __future__ import annotations

from ringline.api import circle, run
from ringline.core.circle_line import CircleLine, synchronize
from ringline.core.polyline import PolylineBuffer, PolylineSink
from ringline.core.ring import generate_ring
from ringline.core.ring_params import (
    DegenerateRingInputError,
    InvalidRingConfigError,
    RingParamsError,
)
from ringline.core.transform import TrackedTransform, Transform

__all__ = [
    "CircleLine",
    "DegenerateRingInputError",
    "InvalidRingConfigError",
    "PolylineBuffer",
    "PolylineSink",
    "RingParamsError",
    "TrackedTransform",
    "Transform",
    "circle",
    "generate_ring",
    "run",
    "synchronize",
]
