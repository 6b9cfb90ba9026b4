"""
どこで: `src/orbitview/core/viewport.py`。
何を: Viewport（scale/rotation/center）と SurfaceSize / Point2D の値モデルを定義する。
なぜ: ホスト側のバインディング層から切り離し、変換関数へ素の値として渡せるようにするため。
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

TAU = 2.0 * math.pi


def normalize_rotation(rotation: float) -> float:
    """回転角 [rad] を 2π で剰余し、[0, 2π) に収める。

    Notes
    -----
    Python の `%` は除数の符号に従うため、負の角度も [0, 2π) 側の代表値になる
    （例: -0.5 -> 2π - 0.5）。丸めで 2π ちょうどになった場合は 0.0 とする。
    NaN/inf はそのまま NaN として伝播する。
    """

    r = float(rotation) % TAU
    if r == TAU:
        return 0.0
    return r


@dataclass(slots=True)
class Viewport:
    """ワールド座標とサーフェス座標の対応を決める可変ビューポート状態。

    Parameters
    ----------
    scale : float, default 1.0
        等方スケール倍率。0 や負値も検証せず受け付ける。
    rotation : float, default 0.0
        回転角 [rad]。代入のたびに `normalize_rotation()` で正規化される。
    center_x, center_y : float, default 0.0
        サーフェス中央に来るワールド座標。
    """

    scale: float = 1.0
    rotation: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0

    def __setattr__(self, name: str, value: object) -> None:
        if name == "rotation":
            value = normalize_rotation(value)  # type: ignore[arg-type]
        elif name in ("scale", "center_x", "center_y"):
            value = float(value)  # type: ignore[arg-type]
        object.__setattr__(self, name, value)

    @property
    def center(self) -> Point2D:
        """ビューポート中心をワールド座標の Point2D で返す。"""

        return Point2D(self.center_x, self.center_y)

    def copy(self) -> Viewport:
        """フレーム内で固定したいときのためのスナップショットを返す。"""

        return Viewport(
            scale=self.scale,
            rotation=self.rotation,
            center_x=self.center_x,
            center_y=self.center_y,
        )


@dataclass(frozen=True, slots=True)
class SurfaceSize:
    """描画領域の現在サイズ [px]。"""

    width: float
    height: float

    @property
    def half(self) -> Point2D:
        return Point2D(float(self.width) / 2.0, float(self.height) / 2.0)


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D 点。ワールド/サーフェスのどちらの空間かは文脈で決まる。"""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


__all__ = ["TAU", "Point2D", "SurfaceSize", "Viewport", "normalize_rotation"]
