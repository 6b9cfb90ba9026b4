"""compose_frame による表示リスト構築のテスト群。"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from orbitview.core.orbit import ORBIT_COUNT, orbit_positions
from orbitview.core.runtime_config import default_viewport, set_config_path
from orbitview.core.scene import (
    GRAY,
    WHITE,
    Arc,
    Circle,
    CircleBatch,
    Segment,
    compose_frame,
    crosshair,
    face_shapes,
)
from orbitview.core.transform import surface_to_world, world_to_surface_matrix
from orbitview.core.viewport import Point2D, SurfaceSize, Viewport


def test_face_is_fixed_at_world_origin() -> None:
    face, left_eye, right_eye, smile = face_shapes()

    assert isinstance(face, Circle)
    assert face.center == Point2D(0.0, 0.0)
    assert face.radius == 50.0
    assert face.fill == WHITE

    assert left_eye == Segment(start=Point2D(-25.0, -5.0), end=Point2D(-25.0, 15.0))
    assert right_eye == Segment(start=Point2D(25.0, -5.0), end=Point2D(25.0, 15.0))

    assert isinstance(smile, Arc)
    assert smile.start == Point2D(-25.0, -10.0)
    assert smile.end == Point2D(25.0, -10.0)
    assert smile.radius == 10.0
    assert smile.clockwise is True


def test_crosshair_is_centered_on_cursor() -> None:
    horizontal, vertical = crosshair(Point2D(100.0, 50.0))

    assert horizontal.start == Point2D(80.0, 50.0)
    assert horizontal.end == Point2D(120.0, 50.0)
    assert vertical.start == Point2D(100.0, 30.0)
    assert vertical.end == Point2D(100.0, 70.0)


def test_compose_frame_layers_and_order() -> None:
    viewport = Viewport(scale=1.5, rotation=0.4, center_x=3.0, center_y=-8.0)
    surface = SurfaceSize(width=640.0, height=480.0)
    cursor = Point2D(200.0, 120.0)

    scene = compose_frame(
        viewport,
        surface,
        cursor=cursor,
        elapsed_ms=1000.0,
        orbit_count=12,
        rng=np.random.default_rng(5),
    )

    assert len(scene.world) == 6
    assert scene.world[:4] == face_shapes()

    marker = scene.world[4]
    assert isinstance(marker, Circle)
    assert marker.fill == GRAY
    assert marker.radius == 20.0
    assert marker.center == surface_to_world(cursor, viewport, surface)
    assert scene.cursor_world == marker.center

    assert isinstance(scene.world[5], CircleBatch)
    assert scene.orbits is scene.world[5]
    assert len(scene.orbits) == 12
    assert scene.orbits.radius == 20.0

    assert scene.overlay == crosshair(cursor)
    assert scene.elapsed_ms == 1000.0
    assert scene.surface == surface


def test_compose_frame_orbits_match_orbit_positions() -> None:
    scene = compose_frame(
        Viewport(),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(0.0, 0.0),
        elapsed_ms=2500.0,
        orbit_count=30,
        rng=np.random.default_rng(11),
    )
    expected = orbit_positions(30, 2500.0, rng=np.random.default_rng(11))

    np.testing.assert_allclose(scene.orbits.centers, expected, rtol=0.0, atol=0.0)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    _isolate_config_discovery(tmp_path, monkeypatch)
    yield tmp_path
    set_config_path(None)


def test_compose_frame_defaults_to_full_orbit_count(isolated_config: Path) -> None:
    scene = compose_frame(
        Viewport(),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(0.0, 0.0),
        elapsed_ms=0.0,
        rng=np.random.default_rng(0),
    )
    assert len(scene.orbits) == ORBIT_COUNT


def test_compose_frame_uses_configured_orbit_count(isolated_config: Path) -> None:
    explicit = isolated_config / "orbitview.yaml"
    explicit.write_text("orbit:\n  count: 5\n", encoding="utf-8")
    set_config_path(explicit)

    scene = compose_frame(
        default_viewport(),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(0.0, 0.0),
        elapsed_ms=0.0,
        rng=np.random.default_rng(0),
    )
    assert len(scene.orbits) == 5

    explicit_count = compose_frame(
        default_viewport(),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(0.0, 0.0),
        elapsed_ms=0.0,
        orbit_count=2,
        rng=np.random.default_rng(0),
    )
    assert len(explicit_count.orbits) == 2


def test_compose_frame_arrays_are_read_only() -> None:
    scene = compose_frame(
        Viewport(),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(0.0, 0.0),
        elapsed_ms=0.0,
        orbit_count=3,
        rng=np.random.default_rng(0),
    )

    with pytest.raises(ValueError):
        scene.orbits.centers[0, 0] = 1.0
    with pytest.raises(ValueError):
        scene.world_to_surface[0, 0] = 1.0


def test_compose_frame_uses_viewport_snapshot() -> None:
    viewport = Viewport(scale=2.0, rotation=1.0, center_x=4.0, center_y=5.0)
    surface = SurfaceSize(width=300.0, height=200.0)
    expected = world_to_surface_matrix(viewport, surface)

    scene = compose_frame(
        viewport,
        surface,
        cursor=Point2D(150.0, 100.0),
        elapsed_ms=0.0,
        orbit_count=0,
    )
    viewport.scale = 9.0

    np.testing.assert_allclose(scene.world_to_surface, expected)
    assert scene.cursor_world.x == pytest.approx(4.0)
    assert scene.cursor_world.y == pytest.approx(5.0)


def test_compose_frame_zero_scale_keeps_non_finite_cursor() -> None:
    scene = compose_frame(
        Viewport(scale=0.0),
        SurfaceSize(width=100.0, height=100.0),
        cursor=Point2D(10.0, 10.0),
        elapsed_ms=0.0,
        orbit_count=1,
        rng=np.random.default_rng(0),
    )
    assert not scene.cursor_world.is_finite()


def test_circle_batch_validates_shape() -> None:
    with pytest.raises(ValueError):
        CircleBatch(centers=np.zeros((3,)), radius=1.0, fill=GRAY)
