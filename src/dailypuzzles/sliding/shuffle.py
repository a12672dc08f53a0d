"""
Shuffle by simulation: replay random legal moves from the solved grid so the
result is always reachable, and therefore solvable.
"""

from dailypuzzles.core.rng import SeededRandom
from dailypuzzles.sliding.game_core import ShuffleResult, SlidingState, neighbors, solved_grid

DEFAULT_SHUFFLE_MOVES = {3: 50, 4: 250}


def default_shuffle_moves(size: int) -> int:
    return DEFAULT_SHUFFLE_MOVES.get(size, 250 if size > 4 else 50)


def shuffle_by_simulation(size: int, rng: SeededRandom, num_moves: int) -> ShuffleResult:
    """
    Move the empty cell ``num_moves`` times.

    Each step picks uniformly among the legal neighbours except the cell the
    empty tile just left; if that leaves nothing, the first legal neighbour is
    taken.

    Args:
        size: grid width
        rng: seeded generator, advanced once per move
        num_moves: number of simulated moves

    Returns:
        ShuffleResult with the trail of empty positions (start included)
    """
    grid = solved_grid(size)
    empty_index = size * size - 1
    last_empty = -1
    trail = [empty_index]

    for _ in range(num_moves):
        valid_moves = neighbors(size, empty_index)
        filtered = [m for m in valid_moves if m != last_empty]
        if filtered:
            move = filtered[rng.randint(len(filtered))]
        else:
            move = valid_moves[0]

        grid[empty_index] = grid[move]
        grid[move] = None
        last_empty = empty_index
        empty_index = move
        trail.append(empty_index)

    return ShuffleResult(grid=grid, empty_index=empty_index, empty_trail=trail)


def create_game_state(size: int, seed: int, shuffle_moves: int = None) -> SlidingState:
    """Seed the generator and build a freshly shuffled board."""
    if shuffle_moves is None:
        shuffle_moves = default_shuffle_moves(size)
    rng = SeededRandom(seed)
    shuffled = shuffle_by_simulation(size, rng, shuffle_moves)
    return SlidingState(
        size=size,
        grid=shuffled.grid,
        empty_index=shuffled.empty_index,
    )
