# どこで: `src/ringline/api/circle.py`。
# 何を: PolylineBuffer と TrackedTransform を束ねた CircleLine を生成する公開ヘルパを提供する。
# なぜ: 未指定の resolution / radius を runtime config の既定値で補い、`run()` にそのまま渡せる形にするため。

from __future__ import annotations

from ringline.core.circle_line import CircleLine, WarningCallback
from ringline.core.polyline import PolylineBuffer
from ringline.core.runtime_config import runtime_config
from ringline.core.transform import TrackedTransform, Vec3


def circle(
    *,
    resolution: int | None = None,
    radius: float | None = None,
    position: Vec3 = (0.0, 0.0, 0.0),
    rotation: Vec3 = (0.0, 0.0, 0.0),
    scale: Vec3 = (1.0, 1.0, 1.0),
    parent: TrackedTransform | None = None,
    on_warning: WarningCallback | None = None,
) -> CircleLine:
    """円リングのコンポーネントを生成する。

    Parameters
    ----------
    resolution : int | None
        リング頂点数。None なら config の `circle.resolution`。
    radius : float | None
        半径。None なら config の `circle.radius`。
    position, rotation, scale : tuple[float, float, float]
        所有オブジェクトの初期変換。rotation は [deg]。
    parent : TrackedTransform | None
        親の変換。親が動くとこのリングも再同期される。
    on_warning : Callable[[str], None] | None
        設定が不正なときの警告通知先。

    Returns
    -------
    CircleLine
        PolylineBuffer を描画先に持つ CircleLine。最初の `tick()` で生成・同期される。
    """
    cfg = runtime_config()
    transform = TrackedTransform(position=position, rotation=rotation, scale=scale, parent=parent)
    return CircleLine(
        PolylineBuffer(),
        transform=transform,
        resolution=cfg.circle_resolution if resolution is None else resolution,
        radius=cfg.circle_radius if radius is None else radius,
        on_warning=on_warning,
    )
