"""
どこで: `src/orbitview/core/scene.py`。
何を: 1 フレーム分の表示リスト（顔・カーソル円・周回円・クロスヘア）を組み立てる。
なぜ: ホストは自前の描画プリミティブで FrameScene を描くだけにし、座標計算をここへ集約するため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from orbitview.core.orbit import ORBIT_CIRCLE_RADIUS, orbit_positions
from orbitview.core.runtime_config import runtime_config
from orbitview.core.transform import surface_to_world, world_to_surface_matrix
from orbitview.core.viewport import Point2D, SurfaceSize, Viewport

_logger = logging.getLogger(__name__)

ColorRGB = tuple[float, float, float]

WHITE: ColorRGB = (1.0, 1.0, 1.0)
GRAY: ColorRGB = (0.5, 0.5, 0.5)
BLACK: ColorRGB = (0.0, 0.0, 0.0)

FACE_RADIUS = 50.0
CURSOR_MARKER_RADIUS = 20.0
CROSSHAIR_HALF_LENGTH = 20.0


@dataclass(frozen=True, slots=True)
class Circle:
    """塗り付き円（線は stroke 色）。"""

    center: Point2D
    radius: float
    fill: ColorRGB
    stroke: ColorRGB = BLACK


@dataclass(frozen=True, slots=True)
class Segment:
    """2 点を結ぶ線分。"""

    start: Point2D
    end: Point2D
    stroke: ColorRGB = BLACK


@dataclass(frozen=True, slots=True)
class Arc:
    """start から end へ向かう円弧（塗りなし）。

    Notes
    -----
    `clockwise` はワールド座標系を Y 下向きのまま描いたときの向き。
    """

    start: Point2D
    end: Point2D
    radius: float
    clockwise: bool = True
    stroke: ColorRGB = BLACK


@dataclass(frozen=True, slots=True, eq=False)
class CircleBatch:
    """同一半径・同一色の円をまとめて表す。

    Parameters
    ----------
    centers : np.ndarray
        float64 shape (N, 2) の中心座標。writeable=False に固定される。
    """

    centers: np.ndarray
    radius: float
    fill: ColorRGB
    stroke: ColorRGB = BLACK

    def __post_init__(self) -> None:
        centers = np.array(self.centers, dtype=np.float64)
        if centers.ndim != 2 or centers.shape[1] != 2:
            raise ValueError(f"centers は shape (N,2) である必要がある: got shape={centers.shape}")
        centers.setflags(write=False)
        object.__setattr__(self, "centers", centers)

    def __len__(self) -> int:
        return int(self.centers.shape[0])


Shape: TypeAlias = Circle | Segment | Arc | CircleBatch


@dataclass(frozen=True, slots=True, eq=False)
class FrameScene:
    """1 フレーム分の表示リスト。

    Parameters
    ----------
    surface : SurfaceSize
        このフレームのサーフェスサイズ。
    elapsed_ms : float
        このフレームの経過時間 [ms]。
    world_to_surface : np.ndarray
        world レイヤ描画前にホストが push する 3x3 行列（writeable=False）。
    world : tuple[Shape, ...]
        ワールド座標で描く要素（描画順）。
    overlay : tuple[Shape, ...]
        変換を pop した後、サーフェス座標で描く要素。
    cursor_world : Point2D
        カーソル位置のワールド座標。scale=0 では非有限になりうる。
    """

    surface: SurfaceSize
    elapsed_ms: float
    world_to_surface: np.ndarray
    world: tuple[Shape, ...]
    overlay: tuple[Shape, ...]
    cursor_world: Point2D

    @property
    def orbits(self) -> CircleBatch:
        """world レイヤ中の周回円バッチを返す。"""

        for item in self.world:
            if isinstance(item, CircleBatch):
                return item
        raise LookupError("FrameScene に周回円バッチが含まれていない")


def face_shapes() -> tuple[Shape, ...]:
    """原点に固定された顔（輪郭・目・口）をワールド座標で返す。"""

    return (
        Circle(center=Point2D(0.0, 0.0), radius=FACE_RADIUS, fill=WHITE),
        Segment(start=Point2D(-25.0, -5.0), end=Point2D(-25.0, 15.0)),
        Segment(start=Point2D(25.0, -5.0), end=Point2D(25.0, 15.0)),
        Arc(start=Point2D(-25.0, -10.0), end=Point2D(25.0, -10.0), radius=10.0, clockwise=True),
    )


def crosshair(cursor: Point2D, *, half_length: float = CROSSHAIR_HALF_LENGTH) -> tuple[Segment, Segment]:
    """サーフェス座標のカーソル位置に十字線を返す。"""

    h = float(half_length)
    return (
        Segment(start=Point2D(cursor.x - h, cursor.y), end=Point2D(cursor.x + h, cursor.y)),
        Segment(start=Point2D(cursor.x, cursor.y - h), end=Point2D(cursor.x, cursor.y + h)),
    )


def compose_frame(
    viewport: Viewport,
    surface: SurfaceSize,
    *,
    cursor: Point2D,
    elapsed_ms: float,
    orbit_count: int | None = None,
    rng: np.random.Generator | None = None,
) -> FrameScene:
    """現在の状態から 1 フレーム分の FrameScene を組み立てる。

    Parameters
    ----------
    viewport : Viewport
        現在のビューポート状態。フレーム内で読むのは 1 回だけ。
    surface : SurfaceSize
        描画領域サイズ。
    cursor : Point2D
        ポインタ位置（サーフェス座標）。
    elapsed_ms : float
        開始時刻からの経過時間 [ms]。
    orbit_count : int | None, optional
        周回円の個数。None なら設定 `orbit.count`（同梱既定は 10000）。
    rng : np.random.Generator | None, optional
        周回半径の揺らぎに使う乱数源。None なら共有生成器。

    Returns
    -------
    FrameScene
        world → overlay の順に描けばよい表示リスト。
    """

    snapshot = viewport.copy()
    count = runtime_config().orbit_count if orbit_count is None else int(orbit_count)

    matrix = world_to_surface_matrix(snapshot, surface)
    matrix.setflags(write=False)

    cursor_world = surface_to_world(cursor, snapshot, surface)
    if not cursor_world.is_finite():
        _logger.debug(
            "カーソルのワールド座標が非有限: cursor=%s scale=%s", cursor, snapshot.scale
        )

    orbits = CircleBatch(
        centers=orbit_positions(count, elapsed_ms, rng=rng),
        radius=ORBIT_CIRCLE_RADIUS,
        fill=GRAY,
    )
    world = (
        *face_shapes(),
        Circle(center=cursor_world, radius=CURSOR_MARKER_RADIUS, fill=GRAY),
        orbits,
    )

    return FrameScene(
        surface=surface,
        elapsed_ms=float(elapsed_ms),
        world_to_surface=matrix,
        world=world,
        overlay=crosshair(cursor),
        cursor_world=cursor_world,
    )


__all__ = [
    "Arc",
    "BLACK",
    "Circle",
    "CircleBatch",
    "ColorRGB",
    "FrameScene",
    "GRAY",
    "Segment",
    "Shape",
    "WHITE",
    "compose_frame",
    "crosshair",
    "face_shapes",
]
