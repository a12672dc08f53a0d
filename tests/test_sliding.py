from dailypuzzles.core.rng import SeededRandom
from dailypuzzles.sliding import (
    ErrorCode,
    SlidingState,
    apply_move,
    create_game_state,
    default_shuffle_moves,
    is_adjacent,
    is_solvable,
    is_solved,
    movable_indices,
    neighbors,
    shuffle_by_simulation,
    slide_tile,
    solved_grid,
)


def test_solved_grid():
    assert solved_grid(3) == [1, 2, 3, 4, 5, 6, 7, 8, None]
    assert is_solved(solved_grid(4))


def test_neighbor_order_is_up_down_left_right():
    assert neighbors(4, 5) == [1, 9, 4, 6]
    assert neighbors(4, 15) == [11, 14]
    assert neighbors(3, 0) == [3, 1]


def test_adjacency_does_not_wrap_rows():
    assert is_adjacent(4, 3, 7)
    assert not is_adjacent(4, 3, 4)
    assert not is_adjacent(4, 0, 5)


def test_default_shuffle_moves():
    assert default_shuffle_moves(4) == 250
    assert default_shuffle_moves(3) == 50


def test_shuffle_is_deterministic():
    a = create_game_state(4, 20251018)
    b = create_game_state(4, 20251018)
    assert a.grid == b.grid
    assert a.empty_index == b.empty_index
    assert a.moves == 0 and not a.is_complete


def test_shuffle_never_steps_straight_back():
    result = shuffle_by_simulation(4, SeededRandom(20251018), 250)
    trail = result.empty_trail
    assert len(trail) == 251
    for i in range(2, len(trail)):
        # every 4x4 cell has two or more neighbours, so the fallback never fires
        assert trail[i] != trail[i - 2]
        assert is_adjacent(4, trail[i], trail[i - 1])


def test_shuffle_trail_reverses_to_solved():
    """Walking the empty cell back along its trail restores the solved grid"""
    result = shuffle_by_simulation(4, SeededRandom(20251018), 250)
    grid = list(result.grid)
    empty = result.empty_index
    for target in reversed(result.empty_trail[:-1]):
        grid[empty], grid[target] = grid[target], None
        empty = target
    assert grid == solved_grid(4)


def test_shuffled_boards_are_solvable():
    for seed in (1, 20251018, 20251225, 123456789):
        state = create_game_state(4, seed)
        assert is_solvable(state.grid, 4)
        state = create_game_state(3, seed)
        assert is_solvable(state.grid, 3)


def test_swapped_tiles_are_not_solvable():
    grid = solved_grid(4)
    grid[13], grid[14] = grid[14], grid[13]
    assert not is_solvable(grid, 4)


def test_non_adjacent_move_is_rejected_without_change():
    state = SlidingState(size=4, grid=solved_grid(4), empty_index=15)
    state = apply_move(state, 14, now=100)
    before = state.to_dict()

    result = slide_tile(state, 0, now=200)
    assert not result.success
    assert result.error == ErrorCode.NOT_ADJACENT
    assert result.state is state
    assert state.to_dict() == before


def test_out_of_bounds_move():
    state = create_game_state(3, 5)
    result = slide_tile(state, 9)
    assert result.error == ErrorCode.OUT_OF_BOUNDS
    assert result.state is state


def test_move_swaps_tile_and_counts():
    state = SlidingState(size=3, grid=solved_grid(3), empty_index=8)
    result = slide_tile(state, 7, now=1000)
    assert result.success
    new = result.state
    assert new.grid == [1, 2, 3, 4, 5, 6, 7, None, 8]
    assert new.empty_index == 7
    assert new.moves == 1
    assert new.start_time == 1000
    assert new.end_time is None
    assert not new.is_complete
    assert state.grid == solved_grid(3)


def test_solving_freezes_the_board():
    state = SlidingState(size=3, grid=solved_grid(3), empty_index=8)
    state = apply_move(state, 7, now=1000)
    state = apply_move(state, 8, now=4000)
    assert state.is_complete
    assert state.moves == 2
    assert state.elapsed_ms() == 3000

    result = slide_tile(state, 7, now=5000)
    assert result.error == ErrorCode.PUZZLE_COMPLETE
    assert result.state is state
    assert movable_indices(state) == []


def test_reverse_trail_with_moves_completes_exactly_at_the_end():
    shuffled = shuffle_by_simulation(4, SeededRandom(20251018), 10)
    state = SlidingState(size=4, grid=shuffled.grid, empty_index=shuffled.empty_index)
    now = 0
    for target in reversed(shuffled.empty_trail[:-1]):
        assert not state.is_complete
        now += 100
        result = slide_tile(state, target, now)
        assert result.success
        state = result.state
    assert state.is_complete
    assert state.moves == 10
    assert state.start_time == 100 and state.end_time == 1000


def test_movable_indices():
    state = SlidingState(size=4, grid=solved_grid(4), empty_index=15)
    assert sorted(movable_indices(state)) == [11, 14]


def test_state_dict_round_trip():
    state = create_game_state(4, 20251018)
    assert SlidingState.from_dict(state.to_dict()) == state
