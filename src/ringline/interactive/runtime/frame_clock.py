# どこで: `src/ringline/interactive/runtime/frame_clock.py`。
# 何を: プレビューの `update(t)` に渡す時刻 `t` を、実時間か固定刻みのどちらかで数える時計を提供する。
# なぜ: 同じスケッチを「実時間で眺める」「毎フレーム同じ刻みで動かして見比べる」の両方で回せるようにするため。

from __future__ import annotations

import time
from typing import Callable, Protocol


class FrameClock(Protocol):
    def t(self) -> float: ...

    def tick(self) -> None: ...


class RealTimeClock:
    """起動からの経過秒を返す時計。`tick()` ではフレーム数だけを数える。"""

    def __init__(self, *, now: Callable[[], float] = time.perf_counter) -> None:
        self._now = now
        self._origin = float(now())
        self.frames = 0

    def t(self) -> float:
        return float(self._now()) - self._origin

    def tick(self) -> None:
        self.frames += 1


class FixedStepClock:
    """1 フレームごとに `1/fps` 秒ずつ進む時計。

    Parameters
    ----------
    fps : float
        1 秒あたりのフレーム数。正の有限値。

    Notes
    -----
    `t` は `frames / fps` で都度計算し、刻みの足し込みによる誤差を溜めない。
    """

    def __init__(self, fps: float) -> None:
        step_fps = float(fps)
        if not step_fps > 0.0 or step_fps == float("inf"):
            raise ValueError(f"fixed_step_fps は正の有限値である必要がある: got={fps!r}")
        self.fps = step_fps
        self.frames = 0

    def t(self) -> float:
        return self.frames / self.fps

    def tick(self) -> None:
        self.frames += 1


def make_frame_clock(fixed_step_fps: float | None = None) -> FrameClock:
    """`fixed_step_fps` が None なら実時間、そうでなければ固定刻みの時計を返す。"""

    if fixed_step_fps is None:
        return RealTimeClock()
    return FixedStepClock(fixed_step_fps)


__all__ = ["FixedStepClock", "FrameClock", "RealTimeClock", "make_frame_clock"]
