"""Grid helpers: bounds, occupancy, empty-cell search and the road rule."""

import random
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from block_city.constants import GRID_SIZE
from block_city.models import Building, BuildingType

Cell = tuple[int, int]

# Offsets of the other three cells of each 2x2 block containing a cell,
# one entry per position the cell can take in the block
ROAD_BLOCK_OFFSETS: tuple[tuple[Cell, Cell, Cell], ...] = (
    ((1, 0), (0, 1), (1, 1)),      # cell is top-left
    ((-1, 0), (0, 1), (-1, 1)),    # top-right
    ((1, 0), (0, -1), (1, -1)),    # bottom-left
    ((-1, 0), (0, -1), (-1, -1)),  # bottom-right
)

NEIGHBOR_OFFSETS: tuple[Cell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def in_bounds(x: int, z: int, grid_size: int = GRID_SIZE) -> bool:
    return 0 <= x < grid_size and 0 <= z < grid_size


def neighbors(x: int, z: int, grid_size: int = GRID_SIZE) -> list[Cell]:
    """In-bounds 4-connected neighbors in +x, -x, +z, -z order."""
    return [
        (x + dx, z + dz)
        for dx, dz in NEIGHBOR_OFFSETS
        if in_bounds(x + dx, z + dz, grid_size)
    ]


def road_cells(buildings: Iterable[Building]) -> set[Cell]:
    return {b.cell for b in buildings if b.type == BuildingType.ROAD}


def can_place_road(x: int, z: int, roads: set[Cell] | frozenset[Cell]) -> bool:
    """Check that a road at (x, z) would not complete a solid 2x2 road block.

    Args:
        x: Candidate cell x.
        z: Candidate cell z.
        roads: Cells already holding a road, including any proposed roads.
    """
    for block in ROAD_BLOCK_OFFSETS:
        if all((x + dx, z + dz) in roads for dx, dz in block):
            return False
    return True


def occupancy_grid(cells: Iterable[Cell], grid_size: int = GRID_SIZE) -> NDArray[np.bool_]:
    """Boolean grid indexed [x, z], True where a cell is taken."""
    grid = np.zeros((grid_size, grid_size), dtype=bool)
    for x, z in cells:
        if in_bounds(x, z, grid_size):
            grid[x, z] = True
    return grid


def empty_cells(
    occupied: Iterable[Cell],
    grid_size: int = GRID_SIZE,
    focus: Cell | None = None,
    limit: int | None = None,
    rng: random.Random | None = None,
) -> list[Cell]:
    """List free cells, nearest to the focus first or shuffled without one.

    Ties in distance keep x-major scan order.
    """
    grid = occupancy_grid(occupied, grid_size)
    coords = np.argwhere(~grid)

    if focus is not None:
        distances = np.hypot(coords[:, 0] - focus[0], coords[:, 1] - focus[1])
        coords = coords[np.argsort(distances, kind="stable")]
        cells = [(int(x), int(z)) for x, z in coords]
    else:
        cells = [(int(x), int(z)) for x, z in coords]
        (rng or random.Random()).shuffle(cells)

    if limit is not None:
        cells = cells[:limit]
    return cells
