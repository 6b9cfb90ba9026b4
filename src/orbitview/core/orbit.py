"""
どこで: `src/orbitview/core/orbit.py`。
何を: 経過時間 [ms] と周回 index から、周回円の中心位置（ワールド座標）を求める。
なぜ: 毎フレーム 1 万個の位置計算を、描画ループから独立した関数として扱うため。
"""

from __future__ import annotations

import math

import numpy as np

from orbitview.core.viewport import Point2D

ORBIT_COUNT = 10000
ORBIT_AMPLITUDE = 300.0
ORBIT_TIME_OFFSET_MS = 987654.0
ORBIT_CIRCLE_RADIUS = 20.0

_SHARED_RNG: np.random.Generator = np.random.default_rng()


def shared_rng() -> np.random.Generator:
    """プロセス共有の乱数生成器を返す。

    Notes
    -----
    描画スレッドに閉じて使う前提で、ロックは持たない。
    """

    return _SHARED_RNG


def seed_shared_rng(seed: int | None) -> np.random.Generator:
    """共有乱数生成器を `seed` で作り直して返す（None は OS エントロピー）。"""

    global _SHARED_RNG
    _SHARED_RNG = np.random.default_rng(seed)
    return _SHARED_RNG


def orbit_input(index: int, elapsed_ms: float) -> float:
    """周回 index の sin/cos に渡す位相を返す。

    `radius = index*100 + 200`、`((elapsed_ms + 987654) / radius) / 10`。
    index が 3 の倍数なら符号を反転する（逆回り）。
    """

    i = int(index)
    orbit_radius = float(i * 100 + 200)
    value = ((float(elapsed_ms) + ORBIT_TIME_OFFSET_MS) / orbit_radius) / 10.0
    if i % 3 == 0:
        value = -value
    return value


def orbit_position(
    index: int,
    elapsed_ms: float,
    *,
    rng: np.random.Generator | None = None,
) -> Point2D:
    """周回円 1 個の中心位置を返す。

    Parameters
    ----------
    index : int
        周回 index（0 始まり）。
    elapsed_ms : float
        開始時刻からの経過時間 [ms]。
    rng : np.random.Generator | None, optional
        乱数源。None なら `shared_rng()` を使う。

    Returns
    -------
    Point2D
        ワールド座標の中心位置。|x|, |y| はいずれも 300 以下。

    Notes
    -----
    呼び出しごとに x, y の順で [0, 1) の乱数を 1 つずつ消費するため純関数ではない。
    """

    gen = shared_rng() if rng is None else rng
    phase = orbit_input(index, elapsed_ms)
    x = math.sin(phase) * float(gen.random()) * ORBIT_AMPLITUDE
    y = math.cos(phase) * float(gen.random()) * ORBIT_AMPLITUDE
    return Point2D(x, y)


def orbit_positions(
    count: int,
    elapsed_ms: float,
    *,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """index 0..count-1 の周回円中心をまとめて返す。

    Parameters
    ----------
    count : int
        周回円の個数。
    elapsed_ms : float
        開始時刻からの経過時間 [ms]。
    rng : np.random.Generator | None, optional
        乱数源。None なら `shared_rng()` を使う。

    Returns
    -------
    np.ndarray
        float64 shape (count, 2) のワールド座標。

    Raises
    ------
    ValueError
        count が負の場合。

    Notes
    -----
    乱数は (count, 2) を行優先で一括生成するため、`orbit_position()` を
    index 順に count 回呼んだ場合と同じ順序で乱数を消費する。
    """

    n = int(count)
    if n < 0:
        raise ValueError(f"count は 0 以上である必要がある: got={count!r}")

    gen = shared_rng() if rng is None else rng
    indices = np.arange(n, dtype=np.int64)
    orbit_radius = (indices * 100 + 200).astype(np.float64)
    phase = ((float(elapsed_ms) + ORBIT_TIME_OFFSET_MS) / orbit_radius) / 10.0
    phase = np.where(indices % 3 == 0, -phase, phase)

    factors = gen.random((n, 2))
    out = np.empty((n, 2), dtype=np.float64)
    out[:, 0] = np.sin(phase) * factors[:, 0] * ORBIT_AMPLITUDE
    out[:, 1] = np.cos(phase) * factors[:, 1] * ORBIT_AMPLITUDE
    return out


__all__ = [
    "ORBIT_AMPLITUDE",
    "ORBIT_CIRCLE_RADIUS",
    "ORBIT_COUNT",
    "ORBIT_TIME_OFFSET_MS",
    "orbit_input",
    "orbit_position",
    "orbit_positions",
    "seed_shared_rng",
    "shared_rng",
]
