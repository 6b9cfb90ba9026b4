# どこで: `src/orbitview/core/__init__.py`。
# 何を: ビューポート変換・周回計算・表示リスト構築のコア層。
# なぜ: interactive 層やホスト UI へ依存しない純粋な計算部分をまとめるため。

from __future__ import annotations

__all__: list[str] = []
