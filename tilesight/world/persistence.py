# tilesight/world/persistence.py
"""Binary save format for per-player FOV state.

A single :class:`PlayerFov` encodes to a short fixed header followed by an
Arrow IPC body written with polars::

    magic   4 bytes  b"TSFV"
    version u16      FORMAT_VERSION
    radius  i32      fov_radius
    body    ...      IPC frame: x Int32, y Int32, state UInt8, in_fov Boolean

One row is written per grid entry. Tiles of the current FOV that the grid
does not know about are written with state ``UNEXPLORED`` so that decoding
restores both collections exactly. A whole player map is stored as one IPC
file with a ``player_id`` column and the per-player encodings as binary
blobs.
"""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import Final

import polars as pl
import structlog

from tilesight.world.player_fov import PlayerFov, PlayerFovMap
from tilesight.world.visibility import TileVisibility, VisibilityGrid

log = structlog.get_logger(__name__)

MAGIC: Final[bytes] = b"TSFV"
FORMAT_VERSION: Final[int] = 1
_HEADER: Final[struct.Struct] = struct.Struct("<4sHi")

TILE_SCHEMA: dict[str, pl.DataType] = {
    "x": pl.Int32,
    "y": pl.Int32,
    "state": pl.UInt8,
    "in_fov": pl.Boolean,
}

MAP_SCHEMA: dict[str, pl.DataType] = {
    "player_id": pl.UInt64,
    "blob": pl.Binary,
}


def _tiles_frame(pfov: PlayerFov) -> pl.DataFrame:
    xs: list[int] = []
    ys: list[int] = []
    states: list[int] = []
    in_fov: list[bool] = []
    for (x, y), state in pfov.visibility.items():
        xs.append(x)
        ys.append(y)
        states.append(int(state))
        in_fov.append((x, y) in pfov.current_fov)
    for x, y in pfov.current_fov:
        if (x, y) not in pfov.visibility:
            xs.append(x)
            ys.append(y)
            states.append(int(TileVisibility.UNEXPLORED))
            in_fov.append(True)
    return pl.DataFrame(
        {"x": xs, "y": ys, "state": states, "in_fov": in_fov}, schema=TILE_SCHEMA
    )


def encode_player_fov(pfov: PlayerFov) -> bytes:
    """Serialize one player's FOV state to bytes."""
    body = io.BytesIO()
    _tiles_frame(pfov).write_ipc(body, compression="zstd")
    return _HEADER.pack(MAGIC, FORMAT_VERSION, pfov.fov_radius) + body.getvalue()


def decode_player_fov(data: bytes) -> PlayerFov:
    """Restore a :class:`PlayerFov` written by :func:`encode_player_fov`.

    Raises ``ValueError`` when the data is not a readable FOV save.
    """
    if len(data) < _HEADER.size:
        raise ValueError("FOV save data is truncated")
    magic, version, radius = _HEADER.unpack_from(data)
    if magic != MAGIC:
        log.error("FOV save data has wrong magic", magic=magic)
        raise ValueError(f"Not an FOV save (magic {magic!r})")
    if version != FORMAT_VERSION:
        log.error("Unsupported FOV save version", version=version)
        raise ValueError(f"Unsupported FOV save version {version}")

    try:
        df = pl.read_ipc(io.BytesIO(data[_HEADER.size :]))
    except Exception as e:
        log.error("Failed to read FOV save body", error=str(e), exc_info=True)
        raise ValueError("FOV save body is unreadable") from e

    missing = [c for c in TILE_SCHEMA if c not in df.columns]
    if missing:
        raise ValueError(f"FOV save body is missing columns: {missing}")

    tiles: dict[tuple[int, int], TileVisibility] = {}
    current: set[tuple[int, int]] = set()
    for x, y, state, in_fov in df.select(list(TILE_SCHEMA)).iter_rows():
        try:
            tiles[(x, y)] = TileVisibility(state)
        except ValueError:
            raise ValueError(f"Invalid tile state {state} at {(x, y)}") from None
        if in_fov:
            current.add((x, y))

    return PlayerFov(radius, visibility=VisibilityGrid(tiles), current_fov=current)


def save_fov_map(path: Path, fov_map: PlayerFovMap) -> None:
    """Write every player's FOV state to a single IPC file."""
    path = Path(path)
    df = pl.DataFrame(
        {
            "player_id": list(fov_map.keys()),
            "blob": [encode_player_fov(p) for p in fov_map.values()],
        },
        schema=MAP_SCHEMA,
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_ipc(path)
    log.info("FOV states saved", path=str(path), players=df.height)


def load_fov_map(path: Path) -> PlayerFovMap:
    """Read a file written by :func:`save_fov_map`."""
    path = Path(path)
    if not path.is_file():
        log.error("FOV save file not found", path=str(path))
        raise FileNotFoundError(f"FOV save file not found: {path}")
    df = pl.read_ipc(path)
    fov_map: PlayerFovMap = {
        int(player_id): decode_player_fov(blob)
        for player_id, blob in df.select(list(MAP_SCHEMA)).iter_rows()
    }
    log.info("FOV states loaded", path=str(path), players=len(fov_map))
    return fov_map
