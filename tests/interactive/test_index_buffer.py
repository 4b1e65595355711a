"""interactive.gl.index_buffer の `build_line_indices` をテスト。"""

from __future__ import annotations

import numpy as np

from ringline.core.polyline import PolylineBuffer, concat_polylines
from ringline.interactive.gl.index_buffer import build_line_indices
from ringline.interactive.gl.line_mesh import LineMesh

RESTART = LineMesh.PRIMITIVE_RESTART_INDEX


def test_build_line_indices_empty() -> None:
    indices = build_line_indices(np.array([0], dtype=np.int32))
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_single_ring_is_one_strip() -> None:
    # resolution=4 のリングは閉じ点込みで 5 頂点
    indices = build_line_indices(np.array([0, 5], dtype=np.int32))
    assert indices.tolist() == [0, 1, 2, 3, 4]


def test_rings_are_separated_by_restart_index() -> None:
    indices = build_line_indices(np.array([0, 5, 14], dtype=np.int32))
    assert indices.tolist() == [0, 1, 2, 3, 4, RESTART, 5, 6, 7, 8, 9, 10, 11, 12, 13]


def test_empty_buffers_are_skipped() -> None:
    # 未生成のリング（0 頂点）や 1 頂点は描けないので飛ばす
    indices = build_line_indices(np.array([0, 0, 1, 4], dtype=np.int32))
    assert indices.tolist() == [1, 2, 3]


def test_indices_are_cached_by_offsets_content() -> None:
    a = build_line_indices(np.array([0, 5, 9], dtype=np.int32))
    b = build_line_indices(np.array([0, 5, 9], dtype=np.int32))
    assert a is b
    assert not a.flags.writeable


def test_indices_from_concatenated_buffers() -> None:
    a = PolylineBuffer()
    a.set_position_count(5)
    b = PolylineBuffer()
    b.set_position_count(3)

    batch = concat_polylines(a.snapshot(), b.snapshot())
    indices = build_line_indices(batch.offsets)
    assert indices.tolist() == [0, 1, 2, 3, 4, RESTART, 5, 6, 7]
