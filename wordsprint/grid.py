import logging

logger = logging.getLogger("wordsprint")

GRID_SIZE = 4
CELL_COUNT = GRID_SIZE * GRID_SIZE
PLACEHOLDER = "?"


def _build_neighbors(grid_size: int) -> list[tuple[int, ...]]:
    """Adjacency lists (rook moves plus diagonals) for a square grid."""
    neighbors: list[tuple[int, ...]] = []
    for idx in range(grid_size * grid_size):
        r, c = divmod(idx, grid_size)
        adj = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = r + dr, c + dc
                if 0 <= nr < grid_size and 0 <= nc < grid_size:
                    adj.append(nr * grid_size + nc)
        neighbors.append(tuple(adj))
    return neighbors


NEIGHBORS = _build_neighbors(GRID_SIZE)


def is_valid_seed(seed) -> bool:
    return (
        isinstance(seed, str)
        and len(seed) == CELL_COUNT
        and all("A" <= ch <= "Z" for ch in seed)
    )


def seed_to_rows(seed: str) -> list[list[str]]:
    """Split a 16-letter seed into 4 rows; malformed seeds give a grid of placeholders."""
    if not isinstance(seed, str) or len(seed) != CELL_COUNT:
        logger.warning("Seed must be %d letters, got %r", CELL_COUNT, seed)
        return [[PLACEHOLDER] * GRID_SIZE for _ in range(GRID_SIZE)]
    return [list(seed[i:i + GRID_SIZE]) for i in range(0, CELL_COUNT, GRID_SIZE)]


def cell_index(row: int, col: int) -> int:
    return row * GRID_SIZE + col


def is_adjacent(a: int, b: int) -> bool:
    return b in NEIGHBORS[a]


def is_valid_path(path: list[int]) -> bool:
    """A path is non-empty, in bounds, never revisits a cell and only steps to neighbors."""
    if not path:
        return False
    if any(not 0 <= idx < CELL_COUNT for idx in path):
        return False
    if len(set(path)) != len(path):
        return False
    return all(is_adjacent(a, b) for a, b in zip(path, path[1:]))
