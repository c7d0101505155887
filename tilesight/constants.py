"""Shared perception constants."""

from typing import Final

# Default field-of-view radius in tiles.
DEFAULT_FOV_RADIUS: Final[int] = 12

# Extra tiles beyond the FOV radius used when filtering entities for network
# transmission. Keeps entities from popping in and out at the FOV edge.
FOV_NETWORK_MARGIN: Final[int] = 2

# Players are batched in groups of this size when recomputed on a thread pool.
DEFAULT_WORKER_BATCH_SIZE: Final[int] = 4

__all__ = ["DEFAULT_FOV_RADIUS", "FOV_NETWORK_MARGIN", "DEFAULT_WORKER_BATCH_SIZE"]
