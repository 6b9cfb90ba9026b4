# どこで: `src/orbitview/__init__.py`。
# 何を: ルート `orbitview` パッケージとして公開 API を再エクスポートする。
# なぜ: ホスト側コードが `from orbitview import ...` だけで済むようにするため。

from __future__ import annotations

from orbitview.core.orbit import orbit_position, orbit_positions, seed_shared_rng, shared_rng
from orbitview.core.runtime_config import (
    apply_orbit_seed,
    default_surface_size,
    default_viewport,
    runtime_config,
    set_config_path,
)
from orbitview.core.scene import FrameScene, compose_frame
from orbitview.core.transform import (
    surface_to_world,
    surface_to_world_matrix,
    surface_to_world_points,
    world_to_surface,
    world_to_surface_matrix,
    world_to_surface_points,
)
from orbitview.core.viewport import Point2D, SurfaceSize, Viewport

__all__ = [
    "FrameScene",
    "Point2D",
    "SurfaceSize",
    "Viewport",
    "apply_orbit_seed",
    "compose_frame",
    "default_surface_size",
    "default_viewport",
    "orbit_position",
    "orbit_positions",
    "runtime_config",
    "seed_shared_rng",
    "set_config_path",
    "shared_rng",
    "surface_to_world",
    "surface_to_world_matrix",
    "surface_to_world_points",
    "world_to_surface",
    "world_to_surface_matrix",
    "world_to_surface_points",
]
