# どこで: `src/orbitview/interactive/runtime/frame_clock.py`。
# 何を: `compose_frame()` に渡す経過時間 [ms] の生成規則を提供する。
# なぜ: 「通常は実時間のストップウォッチ」「テストや書き出しでは固定 fps のタイムライン」を分離するため。

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class FrameClock(Protocol):
    """描画ループが 1 フレームごとに使う時計の共通インターフェース。

    ホストは `elapsed_ms()` を `compose_frame()` へ渡し、描画後に `tick()` を呼ぶ。
    """

    def elapsed_ms(self) -> float: ...

    def tick(self) -> None: ...


class StopwatchClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    経過時間は `perf_counter()` の差分をミリ秒に換算した値。
    """

    def __init__(self, *, start_time: float | None = None) -> None:
        self._start_time = float(time.perf_counter() if start_time is None else start_time)

    def elapsed_ms(self) -> float:
        """開始時刻からの経過時間 [ms] を返す。"""

        return float((time.perf_counter() - self._start_time) * 1000.0)

    def restart(self) -> None:
        """開始時刻を現在に戻す。"""

        self._start_time = float(time.perf_counter())

    def tick(self) -> None:
        """フレームを進める（実時間では no-op）。"""

        return


class FixedStepClock:
    """固定 fps のフレーム時計。

    Notes
    -----
    経過時間は `t0_ms + frame_index * 1000 / fps`。
    """

    def __init__(self, *, t0_ms: float = 0.0, fps: float) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError(f"fps は正の値である必要がある: got={fps!r}")
        self._t0_ms = float(t0_ms)
        self._fps = _fps
        self._frame_index = 0

    @property
    def fps(self) -> float:
        return float(self._fps)

    @property
    def frame_index(self) -> int:
        """現在のフレーム番号（0-based）を返す。"""

        return int(self._frame_index)

    def elapsed_ms(self) -> float:
        return float(self._t0_ms + float(self._frame_index) * 1000.0 / float(self._fps))

    def tick(self) -> None:
        """フレームを 1 つ進める。"""

        self._frame_index += 1
