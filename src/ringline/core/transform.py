# どこで: `src/ringline/core/transform.py`。
# 何を: 位置・回転・スケールの変換値と、変更を revision で追跡する TrackedTransform を提供する。
# なぜ: 「前回同期以降に変換が変わったか」をホストに頼らず明示的に判定できるようにするため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

Vec3 = tuple[float, float, float]


def _as_vec3(value: object, *, name: str) -> Vec3:
    try:
        x, y, z = value  # type: ignore[misc]
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} は長さ 3 の数値シーケンスである必要がある: got={value!r}") from exc


def rotation_matrix(rotation: Vec3) -> np.ndarray:
    """オイラー角 [deg]（rx, ry, rz）から 3x3 回転行列を返す。

    Notes
    -----
    合成順は Rz・Ry・Rx（X 軸回転を最初に適用する）。
    """
    rx, ry, rz = np.deg2rad([float(rotation[0]), float(rotation[1]), float(rotation[2])])
    sin_x, sin_y, sin_z = np.sin([rx, ry, rz])
    cos_x, cos_y, cos_z = np.cos([rx, ry, rz])

    rot = np.empty((3, 3), dtype=np.float64)
    rot[0, 0] = cos_y * cos_z
    rot[0, 1] = sin_x * sin_y * cos_z - cos_x * sin_z
    rot[0, 2] = cos_x * sin_y * cos_z + sin_x * sin_z
    rot[1, 0] = cos_y * sin_z
    rot[1, 1] = sin_x * sin_y * sin_z + cos_x * cos_z
    rot[1, 2] = cos_x * sin_y * sin_z - sin_x * cos_z
    rot[2, 0] = -sin_y
    rot[2, 1] = sin_x * cos_y
    rot[2, 2] = cos_x * cos_y
    return rot


@dataclass(frozen=True, slots=True)
class Transform:
    """スケール→回転→平行移動の順に適用する変換値。

    Parameters
    ----------
    position : tuple[float, float, float]
        平行移動量。
    rotation : tuple[float, float, float]
        各軸の回転角 [deg]（rx, ry, rz）。
    scale : tuple[float, float, float]
        各軸の倍率（非一様可）。
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_vec3(self.position, name="position"))
        object.__setattr__(self, "rotation", _as_vec3(self.rotation, name="rotation"))
        object.__setattr__(self, "scale", _as_vec3(self.scale, name="scale"))

    def matrix(self) -> np.ndarray:
        """ローカル→親座標への 4x4 同次変換行列を返す。"""
        m = np.eye(4, dtype=np.float64)
        m[:3, :3] = rotation_matrix(self.rotation) * np.asarray(self.scale, dtype=np.float64)
        m[:3, 3] = self.position
        return m


def transform_points(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """(N,2) または (N,3) の点列に 4x4 行列を適用し、(N,3) の float64 配列を返す。

    2D 入力は z=0 を補完する。
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise ValueError("points は shape (N,2) または (N,3) の 2 次元配列である必要がある")
    if pts.shape[1] == 2:
        pts = np.concatenate([pts, np.zeros((pts.shape[0], 1), dtype=np.float64)], axis=1)

    m = np.asarray(matrix, dtype=np.float64)
    return pts @ m[:3, :3].T + m[:3, 3]


class TrackedTransform:
    """変更を revision で追跡する可変の変換。

    値が実際に変わったときだけ revision を進める。
    親を持つ場合、ワールド行列は `parent.world @ local` で、revision も親の分を含む。
    """

    def __init__(
        self,
        *,
        position: Vec3 = (0.0, 0.0, 0.0),
        rotation: Vec3 = (0.0, 0.0, 0.0),
        scale: Vec3 = (1.0, 1.0, 1.0),
        parent: TrackedTransform | None = None,
    ) -> None:
        self._local = Transform(position=position, rotation=rotation, scale=scale)
        self._parent: TrackedTransform | None = None
        self._own_revision = 0
        self._parent_link_revision = 0
        if parent is not None:
            self.parent = parent

    # ---------- 値の参照と更新 ----------
    @property
    def local(self) -> Transform:
        """現在のローカル変換値を返す。"""
        return self._local

    @property
    def position(self) -> Vec3:
        return self._local.position

    @position.setter
    def position(self, value: Vec3) -> None:
        self._replace(Transform(value, self._local.rotation, self._local.scale))

    @property
    def rotation(self) -> Vec3:
        return self._local.rotation

    @rotation.setter
    def rotation(self, value: Vec3) -> None:
        self._replace(Transform(self._local.position, value, self._local.scale))

    @property
    def scale(self) -> Vec3:
        return self._local.scale

    @scale.setter
    def scale(self, value: Vec3) -> None:
        self._replace(Transform(self._local.position, self._local.rotation, value))

    def set(
        self,
        *,
        position: Vec3 | None = None,
        rotation: Vec3 | None = None,
        scale: Vec3 | None = None,
    ) -> None:
        """複数成分をまとめて更新する（revision は高々 1 つ進む）。"""
        cur = self._local
        self._replace(
            Transform(
                cur.position if position is None else position,
                cur.rotation if rotation is None else rotation,
                cur.scale if scale is None else scale,
            )
        )

    def _replace(self, new: Transform) -> None:
        if new == self._local:
            return
        self._local = new
        self._own_revision += 1

    def mark_changed(self) -> None:
        """値を変えずに変更済みとして扱わせる。"""
        self._own_revision += 1

    # ---------- 親子関係 ----------
    @property
    def parent(self) -> TrackedTransform | None:
        return self._parent

    @parent.setter
    def parent(self, value: TrackedTransform | None) -> None:
        node = value
        while node is not None:
            if node is self:
                raise ValueError("親子関係が循環している")
            node = node._parent
        if value is self._parent:
            return
        self._parent = value
        self._parent_link_revision += 1

    @property
    def revision(self) -> tuple[int, ...]:
        """自身と親チェーン全体の変更状態を表す値を返す。

        この値が前回と異なれば、ワールド座標への写像が変わった可能性がある。
        """
        own = (self._own_revision, self._parent_link_revision)
        if self._parent is None:
            return own
        return own + self._parent.revision

    def local_to_world_matrix(self) -> np.ndarray:
        """ローカル→ワールドの 4x4 同次変換行列を返す。"""
        m = self._local.matrix()
        if self._parent is None:
            return m
        return self._parent.local_to_world_matrix() @ m

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        """ローカル点列をワールド座標へ写像する。"""
        return transform_points(points, self.local_to_world_matrix())

    def __repr__(self) -> str:
        return (
            f"TrackedTransform(position={self.position}, rotation={self.rotation}, "
            f"scale={self.scale}, revision={self.revision})"
        )


__all__ = ["Transform", "TrackedTransform", "Vec3", "rotation_matrix", "transform_points"]
