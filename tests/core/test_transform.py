"""Transform / TrackedTransform の写像と変更追跡のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from ringline.core.transform import TrackedTransform, Transform, transform_points


def test_identity_transform_lifts_2d_points_to_z0() -> None:
    pts = np.array([[1.0, 2.0], [-3.0, 4.0]])
    out = transform_points(pts, Transform().matrix())
    np.testing.assert_array_equal(out, [[1.0, 2.0, 0.0], [-3.0, 4.0, 0.0]])


def test_scale_then_rotate_then_translate() -> None:
    t = Transform(position=(10.0, 20.0, 30.0), rotation=(0.0, 0.0, 90.0), scale=(2.0, 3.0, 1.0))
    out = transform_points(np.array([[1.0, 0.0], [0.0, 1.0]]), t.matrix())
    # (1,0) -> scale (2,0) -> rotZ90 (0,2) -> +pos
    np.testing.assert_allclose(out[0], [10.0, 22.0, 30.0], rtol=0.0, atol=1e-12)
    # (0,1) -> scale (0,3) -> rotZ90 (-3,0) -> +pos
    np.testing.assert_allclose(out[1], [7.0, 20.0, 30.0], rtol=0.0, atol=1e-12)


def test_rotation_about_x_tilts_ring_out_of_plane() -> None:
    t = Transform(rotation=(90.0, 0.0, 0.0))
    out = transform_points(np.array([[0.0, 1.0]]), t.matrix())
    np.testing.assert_allclose(out[0], [0.0, 0.0, 1.0], rtol=0.0, atol=1e-12)


def test_transform_rejects_malformed_vectors() -> None:
    with pytest.raises(ValueError):
        Transform(position=(1.0, 2.0))  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [(1.0, "x", 0.0), None, (1.0, 2.0, 3.0, 4.0)])
def test_transform_malformed_vector_is_value_error(value) -> None:
    with pytest.raises(ValueError, match="rotation"):
        Transform(rotation=value)  # type: ignore[arg-type]


class _BrokenVector:
    def __iter__(self):
        raise RuntimeError("broken")


def test_transform_does_not_mask_unrelated_errors() -> None:
    """TypeError/ValueError 以外の例外は ValueError に包まずそのまま伝播する。"""
    with pytest.raises(RuntimeError, match="broken"):
        Transform(scale=_BrokenVector())  # type: ignore[arg-type]


def test_transform_points_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        transform_points(np.zeros((3, 4)), np.eye(4))


def test_revision_advances_only_on_effective_change() -> None:
    tr = TrackedTransform()
    r0 = tr.revision

    tr.position = (0.0, 0.0, 0.0)
    assert tr.revision == r0

    tr.position = (1.0, 0.0, 0.0)
    r1 = tr.revision
    assert r1 != r0

    tr.set(position=(1.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0))
    assert tr.revision == r1

    tr.set(rotation=(0.0, 0.0, 45.0), scale=(2.0, 2.0, 1.0))
    assert tr.revision != r1
    assert tr.rotation == (0.0, 0.0, 45.0)
    assert tr.scale == (2.0, 2.0, 1.0)


def test_mark_changed_advances_revision_without_value_change() -> None:
    tr = TrackedTransform(position=(1.0, 2.0, 3.0))
    r0 = tr.revision
    tr.mark_changed()
    assert tr.revision != r0
    assert tr.position == (1.0, 2.0, 3.0)


def test_parent_chain_composes_world_matrix() -> None:
    parent = TrackedTransform(position=(100.0, 0.0, 0.0), rotation=(0.0, 0.0, 90.0))
    child = TrackedTransform(position=(10.0, 0.0, 0.0), parent=parent)

    out = child.transform_points(np.array([[1.0, 0.0]]))
    # child: (11,0) -> parent rotZ90 (0,11) -> +(100,0)
    np.testing.assert_allclose(out[0], [100.0, 11.0, 0.0], rtol=0.0, atol=1e-12)


def test_parent_change_is_visible_in_child_revision() -> None:
    parent = TrackedTransform()
    child = TrackedTransform(parent=parent)
    r0 = child.revision

    parent.position = (5.0, 0.0, 0.0)
    assert child.revision != r0


def test_reparenting_changes_revision() -> None:
    a = TrackedTransform()
    b = TrackedTransform()
    child = TrackedTransform(parent=a)
    r0 = child.revision

    child.parent = b
    r1 = child.revision
    assert r1 != r0

    child.parent = b
    assert child.revision == r1

    child.parent = None
    assert child.revision != r1


def test_parent_cycle_is_rejected() -> None:
    a = TrackedTransform()
    b = TrackedTransform(parent=a)
    with pytest.raises(ValueError):
        a.parent = b
    with pytest.raises(ValueError):
        a.parent = a
