# どこで: `src/orbitview/interactive/runtime/__init__.py`。
# 何を: ホスト側の描画ループから使う実行時ユーティリティ（フレーム時計）のパッケージ定義。
# なぜ: core の座標計算とホスト依存の時刻取得を分けておくため。

from __future__ import annotations

from orbitview.interactive.runtime.frame_clock import (
    FixedStepClock,
    FrameClock,
    StopwatchClock,
)

__all__ = ["FixedStepClock", "FrameClock", "StopwatchClock"]
