# どこで: `src/ringline/core/circle_line.py`。
# 何を: リング点列を所有変換でワールド座標へ写し、描画先へ反映するコンポーネントを提供する。
# なぜ: 設定か変換が変わったフレームだけ再計算/再転送し、変化のないフレームを無処理で済ませるため。

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

import numpy as np

from ringline.core.polyline import PolylineSink
from ringline.core.ring import generate_ring
from ringline.core.ring_params import (
    DEFAULT_RADIUS,
    DEFAULT_RESOLUTION,
    RingParams,
    RingParamsError,
    validate_ring_params,
)
from ringline.core.transform import TrackedTransform

_logger = logging.getLogger(__name__)

WarningCallback = Callable[[str], None]


def synchronize(ring: np.ndarray, transform: TrackedTransform, sink: PolylineSink) -> None:
    """ring の各点をワールド座標へ写像し、同じ index で sink へ書き込む。"""
    world = transform.transform_points(ring)
    sink.set_position_count(int(world.shape[0]))
    for i, p in enumerate(world):
        sink.set_position(i, (float(p[0]), float(p[1]), float(p[2])))


class SyncState(Enum):
    IDLE = "idle"
    SYNCING = "syncing"


class CircleLine:
    """円リングを描画先へ同期し続けるコンポーネント。

    Parameters
    ----------
    sink : PolylineSink
        ワールド座標の頂点を受け取る描画先。
    transform : TrackedTransform | None
        所有オブジェクトの変換。None の場合は単位変換を新規作成する。
    resolution : int
        リング頂点数。4 の倍数かつ [4, 500]。
    radius : float
        半径。[0.0001, 100]。
    on_warning : Callable[[str], None] | None
        設定が不正なときに警告文を受け取るコールバック。

    Notes
    -----
    `tick()` は 1 フレームに 1 回呼ぶ。初回は無条件に生成と同期を行い、
    以降は設定変更（生成＋同期）または変換の変更（同期のみ）があったときだけ処理する。
    不正な設定は警告に留め、最後に有効だったリングを使い続ける。
    """

    def __init__(
        self,
        sink: PolylineSink,
        *,
        transform: TrackedTransform | None = None,
        resolution: int = DEFAULT_RESOLUTION,
        radius: float = DEFAULT_RADIUS,
        on_warning: WarningCallback | None = None,
    ) -> None:
        self._sink = sink
        self._transform = transform if transform is not None else TrackedTransform()
        self._resolution = resolution
        self._radius = radius
        self._on_warning = on_warning

        self._ring: np.ndarray | None = None
        self._params: RingParams | None = None
        self._config_dirty = True
        self._started = False
        self._synced_revision: tuple[int, ...] | None = None
        self._state = SyncState.IDLE

    # ---------- 設定 ----------
    @property
    def resolution(self) -> int:
        return self._resolution

    @resolution.setter
    def resolution(self, value: int) -> None:
        self._resolution = value
        self._config_dirty = True

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = value
        self._config_dirty = True

    def configure(self, *, resolution: int | None = None, radius: float | None = None) -> None:
        """resolution / radius をまとめて更新する（次の tick で再生成）。"""
        if resolution is not None:
            self._resolution = resolution
        if radius is not None:
            self._radius = radius
        self._config_dirty = True

    # ---------- 参照 ----------
    @property
    def sink(self) -> PolylineSink:
        return self._sink

    @property
    def transform(self) -> TrackedTransform:
        return self._transform

    @property
    def ring(self) -> np.ndarray | None:
        """最後に有効だったローカル座標のリング（未生成なら None）。"""
        return self._ring

    @property
    def params(self) -> RingParams | None:
        """ring の生成に使ったパラメータ。"""
        return self._params

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def needs_sync(self) -> bool:
        """次の tick で同期が走るかを返す。"""
        if not self._started or self._config_dirty:
            return True
        return self._transform.revision != self._synced_revision

    # ---------- フレーム処理 ----------
    def regenerate(self) -> bool:
        """現在の設定でリングを作り直す。失敗時は警告して既存リングを保持する。"""
        self._config_dirty = False
        try:
            params = validate_ring_params(self._resolution, self._radius)
            ring = generate_ring(params.resolution, params.radius)
        except RingParamsError as exc:
            self._warn(str(exc))
            return False
        self._params = params
        self._ring = ring
        return True

    def synchronize(self) -> None:
        """現在のリングを描画先へ書き込み、変換の revision を同期済みとして記録する。"""
        revision = self._transform.revision
        if self._ring is not None:
            synchronize(self._ring, self._transform, self._sink)
        self._synced_revision = revision

    def tick(self) -> bool:
        """1 フレーム分の更新を行い、同期を実行したかを返す。"""
        if not self.needs_sync:
            return False

        self._state = SyncState.SYNCING
        try:
            if not self._started or self._config_dirty:
                self.regenerate()
            self._started = True
            self.synchronize()
        finally:
            self._state = SyncState.IDLE
        return True

    def _warn(self, message: str) -> None:
        _logger.warning("リング設定が不正なため再生成をスキップします: %s", message)
        if self._on_warning is not None:
            self._on_warning(message)

    def __repr__(self) -> str:
        return (
            f"CircleLine(resolution={self._resolution!r}, radius={self._radius!r}, "
            f"state={self._state.value})"
        )


__all__ = ["CircleLine", "SyncState", "WarningCallback", "synchronize"]
