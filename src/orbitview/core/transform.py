"""
どこで: `src/orbitview/core/transform.py`。
何を: ワールド座標（Y 上向き）とサーフェス座標（左上原点・Y 下向き）の相互変換を提供する。
なぜ: 描画時の座標系スタックとカーソル逆写像を、ホスト UI に依存しない純関数として扱うため。
"""

from __future__ import annotations

import math

import numpy as np

from orbitview.core.viewport import Point2D, SurfaceSize, Viewport


def _as_points(points: object) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(-1, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"points は shape (N,2) の配列である必要がある: got shape={arr.shape}")
    return arr


def _rotate(points: np.ndarray, rotation: float) -> np.ndarray:
    # 標準回転行列 [[c, -s], [s, c]]（row-vector のため転置で適用）
    c = math.cos(rotation)
    s = math.sin(rotation)
    rot = np.array([[c, -s], [s, c]], dtype=np.float64)
    return points @ rot.T


def _translation(tx: float, ty: float) -> np.ndarray:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]], dtype=np.float64)


def _rotation(rotation: float) -> np.ndarray:
    c = math.cos(rotation)
    s = math.sin(rotation)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def _scaling(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def world_to_surface_points(
    points: object, viewport: Viewport, surface: SurfaceSize
) -> np.ndarray:
    """ワールド座標の点列をサーフェス座標へ写す。

    Parameters
    ----------
    points : array-like
        shape (N, 2) のワールド座標。
    viewport : Viewport
        現在のビューポート状態。
    surface : SurfaceSize
        描画領域サイズ。

    Returns
    -------
    np.ndarray
        float64 shape (N, 2) のサーフェス座標。

    Notes
    -----
    適用順序: center 減算 → (scale, -scale) 倍 → rotation 回転 → 半サイズ加算。
    scale=0 の場合は全点がサーフェス中央に縮退する（エラーにしない）。
    """

    p = _as_points(points)
    s = float(viewport.scale)
    with np.errstate(invalid="ignore", over="ignore"):
        shifted = p - np.array([viewport.center_x, viewport.center_y], dtype=np.float64)
        scaled = shifted * np.array([s, -s], dtype=np.float64)
        rotated = _rotate(scaled, viewport.rotation)
        half = surface.half
        return rotated + np.array([half.x, half.y], dtype=np.float64)


def surface_to_world_points(
    points: object, viewport: Viewport, surface: SurfaceSize
) -> np.ndarray:
    """サーフェス座標の点列をワールド座標へ逆写像する。

    Parameters
    ----------
    points : array-like
        shape (N, 2) のサーフェス座標（ポインタ位置など）。
    viewport : Viewport
        現在のビューポート状態。
    surface : SurfaceSize
        描画領域サイズ。

    Returns
    -------
    np.ndarray
        float64 shape (N, 2) のワールド座標。

    Notes
    -----
    Y 反転 → (-w/2, +h/2) 加算 → scale 除算 → +rotation 回転 → center 加算。
    先に Y を反転しているため、+rotation の回転は反転前の -rotation と等価であり、
    `world_to_surface_points()` の厳密な逆変換になる。
    scale=0 の除算は inf/NaN をそのまま返す。
    """

    p = _as_points(points)
    s = float(viewport.scale)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        flipped = p * np.array([1.0, -1.0], dtype=np.float64)
        moved = flipped + np.array(
            [-float(surface.width) / 2.0, float(surface.height) / 2.0], dtype=np.float64
        )
        unscaled = moved / np.float64(s)
        rotated = _rotate(unscaled, viewport.rotation)
        return rotated + np.array([viewport.center_x, viewport.center_y], dtype=np.float64)


def world_to_surface(world: Point2D, viewport: Viewport, surface: SurfaceSize) -> Point2D:
    """ワールド座標の 1 点をサーフェス座標へ写す。"""

    out = world_to_surface_points([[world.x, world.y]], viewport, surface)
    return Point2D(float(out[0, 0]), float(out[0, 1]))


def surface_to_world(
    surface_point: Point2D, viewport: Viewport, surface: SurfaceSize
) -> Point2D:
    """サーフェス座標の 1 点（カーソル位置など）をワールド座標へ写す。"""

    out = surface_to_world_points([[surface_point.x, surface_point.y]], viewport, surface)
    return Point2D(float(out[0, 0]), float(out[0, 1]))


def world_to_surface_matrix(viewport: Viewport, surface: SurfaceSize) -> np.ndarray:
    """ワールド→サーフェスの 3x3 同次変換行列を返す。

    Notes
    -----
    `T(w/2, h/2) @ R(rotation) @ S(scale, -scale) @ T(-cx, -cy)`。
    ホストが描画コンテキストへ push する行列として使う（列ベクトル規約）。
    """

    s = float(viewport.scale)
    half = surface.half
    return (
        _translation(half.x, half.y)
        @ _rotation(viewport.rotation)
        @ _scaling(s, -s)
        @ _translation(-viewport.center_x, -viewport.center_y)
    )


def surface_to_world_matrix(viewport: Viewport, surface: SurfaceSize) -> np.ndarray:
    """サーフェス→ワールドの 3x3 同次変換行列を返す（scale=0 では inf/NaN を含む）。"""

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        inv_s = np.float64(1.0) / np.float64(viewport.scale)
        return (
            _translation(viewport.center_x, viewport.center_y)
            @ _rotation(viewport.rotation)
            @ _scaling(float(inv_s), float(inv_s))
            @ _translation(-float(surface.width) / 2.0, float(surface.height) / 2.0)
            @ _scaling(1.0, -1.0)
        )


def apply_matrix(matrix: np.ndarray, points: object) -> np.ndarray:
    """3x3 同次変換行列を shape (N, 2) の点列へ適用する。"""

    p = _as_points(points)
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (3, 3):
        raise ValueError(f"matrix は shape (3,3) である必要がある: got shape={m.shape}")
    with np.errstate(invalid="ignore", over="ignore"):
        return p @ m[:2, :2].T + m[:2, 2]


__all__ = [
    "apply_matrix",
    "surface_to_world",
    "surface_to_world_matrix",
    "surface_to_world_points",
    "world_to_surface",
    "world_to_surface_matrix",
    "world_to_surface_points",
]
