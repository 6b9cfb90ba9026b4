# どこで: `src/orbitview/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 初期ビューポートや周回円の個数を、コードを変えずにユーザーが指定できるようにするため。

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from orbitview.core.orbit import seed_shared_rng
from orbitview.core.viewport import SurfaceSize, Viewport, normalize_rotation

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """orbitview の実行時設定。"""

    config_path: Path | None
    viewport_scale: float
    viewport_rotation: float
    viewport_center: tuple[float, float]
    surface_size: tuple[float, float]
    orbit_count: int
    orbit_seed: int | None


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".orbitview" / "config.yaml",
        home / ".config" / "orbitview" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float_pair(value: Any, *, key: str) -> tuple[float, float] | None:
    if value is None:
        return None
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        return (float(seq[0]), float(seq[1]))
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の数値配列である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("orbitview")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="orbitview/resource/default_config.yaml")


def _merge_section(payload: dict[str, Any], override: dict[str, Any]) -> None:
    # セクション単位で後勝ちマージする（viewport.scale だけの上書きを許す）。
    for key, value in override.items():
        base = payload.get(key)
        if isinstance(base, dict) and isinstance(value, dict):
            merged = dict(base)
            merged.update(value)
            payload[key] = merged
        else:
            payload[key] = value


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _logger.debug("config.yaml を検出: %s", discovered_path)
        _merge_section(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        _logger.debug("明示 config.yaml を使用: %s", explicit_path)
        _merge_section(payload, _load_yaml_config(explicit_path))

    version = _require(payload.get("version"), key="version")
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    viewport = _as_mapping(payload.get("viewport"), key="viewport")
    scale = _require(_as_float(viewport.get("scale"), key="viewport.scale"), key="viewport.scale")
    rotation = _require(
        _as_float(viewport.get("rotation"), key="viewport.rotation"), key="viewport.rotation"
    )
    center = _require(
        _as_float_pair(viewport.get("center"), key="viewport.center"), key="viewport.center"
    )

    surface = _as_mapping(payload.get("surface"), key="surface")
    surface_size = _require(
        _as_float_pair(surface.get("size"), key="surface.size"), key="surface.size"
    )

    orbit = _as_mapping(payload.get("orbit"), key="orbit")
    orbit_count = _require(_as_int(orbit.get("count"), key="orbit.count"), key="orbit.count")
    if orbit_count < 0:
        raise ValueError(f"orbit.count は 0 以上である必要があります: got={orbit_count}")
    orbit_seed = _as_int(orbit.get("seed"), key="orbit.seed")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        viewport_scale=float(scale),
        viewport_rotation=normalize_rotation(rotation),
        viewport_center=center,
        surface_size=surface_size,
        orbit_count=int(orbit_count),
        orbit_seed=orbit_seed,
    )
    _CONFIG_CACHE = cfg
    return cfg


def default_viewport() -> Viewport:
    """設定値から新しい Viewport を作って返す（呼び出しごとに別インスタンス）。"""

    cfg = runtime_config()
    cx, cy = cfg.viewport_center
    return Viewport(
        scale=cfg.viewport_scale,
        rotation=cfg.viewport_rotation,
        center_x=cx,
        center_y=cy,
    )


def default_surface_size() -> SurfaceSize:
    """設定値の既定サーフェスサイズを返す。"""

    w, h = runtime_config().surface_size
    return SurfaceSize(width=w, height=h)


def apply_orbit_seed() -> bool:
    """orbit.seed が設定されていれば共有乱数生成器を再シードする。

    Returns
    -------
    bool
        再シードした場合 True。
    """

    seed = runtime_config().orbit_seed
    if seed is None:
        return False
    seed_shared_rng(seed)
    _logger.debug("共有乱数生成器を再シード: seed=%s", seed)
    return True


__all__ = [
    "RuntimeConfig",
    "apply_orbit_seed",
    "default_surface_size",
    "default_viewport",
    "runtime_config",
    "set_config_path",
]
