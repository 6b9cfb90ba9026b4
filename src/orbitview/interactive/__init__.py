# どこで: `src/orbitview/interactive/__init__.py`。
# 何を: ホストの描画ループ側で使うヘルパ群のパッケージ定義。

from __future__ import annotations

__all__: list[str] = []
