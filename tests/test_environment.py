from datetime import date

import pytest
from PIL import Image

from dailypuzzles.core.base import Action
from dailypuzzles.core.config import GameConfig
from dailypuzzles.core.registry import ENVIRONMENT_REGISTRY
from dailypuzzles.core.seeding import FixedClock
from dailypuzzles.environment import PackingEnvironment, SlidingPuzzleEnvironment
from dailypuzzles.sliding import neighbors

# Block Logic counts from 2025-11-28, so mid-October sits before its epoch
PACKING_DAYS_TO_OCT_18 = 41


def make_env(game_type, clock, **overrides):
    config = GameConfig.from_dict({"type": game_type, **overrides})
    return ENVIRONMENT_REGISTRY[game_type](config, clock=clock)


def test_registry_maps_modes_to_environments():
    assert ENVIRONMENT_REGISTRY["daily_15"] is SlidingPuzzleEnvironment
    assert ENVIRONMENT_REGISTRY["quick_blitz"] is SlidingPuzzleEnvironment
    assert ENVIRONMENT_REGISTRY["block_logic"] is PackingEnvironment


def test_daily_sliding_reset(clock):
    env = make_env("daily_15", clock)
    observation = env.reset()
    assert env.seed == 20251018
    assert env.puzzle_number == 29
    assert env.storage_key == "daily_15_20251018"
    assert observation.step == 0
    assert isinstance(observation.image, Image.Image)
    assert observation.image.size == (360, 360)
    assert "The Fifteen No. 29" in observation.description
    assert observation.metadata["size"] == 4
    assert observation.to_dict()["metadata"]["seed"] == 20251018


def test_blitz_uses_clock_millis_and_is_not_stored():
    clock = FixedClock(date(2025, 10, 18), now_ms=987654321)
    env = make_env("quick_blitz", clock)
    env.reset()
    assert env.seed == 987654321
    assert env.storage_key is None
    assert env.puzzle_number is None
    assert len(env.game_state.grid) == 9


def test_tool_before_reset(clock):
    env = make_env("daily_15", clock)
    result = env.execute_tool_call("move", {"index": 0})
    assert result["status"] == "error"
    assert "No puzzle loaded" in result["message"]


def test_unknown_tool(clock):
    env = make_env("daily_15", clock)
    env.reset()
    result = env.execute_tool_call("jump", {})
    assert result == {"status": "error", "message": "Unknown tool 'jump'"}


def test_move_tool(clock):
    env = make_env("daily_15", clock)
    env.reset()
    empty = env.game_state.empty_index
    target = neighbors(4, empty)[0]
    row, col = divmod(target, 4)

    observation = env.step(Action("move", {"row": row, "col": col}))
    result = observation.metadata["tool_result"]
    assert result["status"] == "success"
    assert result["moves"] == 1
    assert env.game_state.empty_index == target
    assert observation.step == 1
    assert observation.metadata["tool_call"] == {"action_type": "move", "parameters": {"row": row, "col": col}}


def test_rejected_move_keeps_board(clock):
    env = make_env("daily_15", clock)
    env.reset()
    before = env.snapshot()
    far = next(i for i in range(16) if i != env.game_state.empty_index
               and i not in neighbors(4, env.game_state.empty_index))
    result = env.execute_tool_call("move", {"index": far})
    assert result["status"] == "error"
    assert result["error"] == "NotAdjacent"
    assert env.snapshot() == before

    result = env.execute_tool_call("move", {"row": 9, "col": 0})
    assert result["error"] == "OutOfBounds"
    result = env.execute_tool_call("move", {})
    assert result["status"] == "error"


def test_bad_arguments_are_reported(clock):
    env = make_env("block_logic", clock)
    env.reset()
    result = env.execute_tool_call("place", {"piece_id": "T4"})
    assert result["status"] == "error"
    assert "failed" in result["message"]


def test_solving_blitz_reports_ranking(clock):
    env = make_env("quick_blitz", clock, shuffle_moves=1)
    env.reset()
    clock.advance(65_000)
    result = env.execute_tool_call("move", {"index": 8})
    assert result["status"] == "success"
    assert result["message"] == "Puzzle solved"
    assert result["ranking"] == "Grandmaster"
    assert env.is_complete
    assert env.elapsed_ms == 0
    assert env.execute_tool_call("ranking", {})["ranking"]["title"] == "Grandmaster"


def test_sliding_restore_checks_size(clock):
    env = make_env("daily_15", clock)
    env.reset()
    blitz = make_env("quick_blitz", clock)
    blitz.reset()
    with pytest.raises(ValueError):
        env.restore(blitz.snapshot())


def test_packing_reset_and_tools(clock):
    env = make_env("block_logic", clock)
    observation = env.reset()
    assert env.seed == 20251018
    assert env.puzzle_number == PACKING_DAYS_TO_OCT_18
    assert env.storage_key is None
    assert observation.metadata["filled"] == 6
    assert len(observation.metadata["unplaced_pieces"]) == 9

    r, c = env.game_state.empty_cells()[0]
    assert env.execute_tool_call("select", {"piece_id": "I1"})["status"] == "success"
    result = env.execute_tool_call("click", {"row": r, "col": c})
    assert result["status"] == "success"
    assert result["cells"] == [[r, c]]
    assert env.moves == 1

    result = env.execute_tool_call("remove", {"piece_id": "I1"})
    assert result["status"] == "success"
    assert env.game_state.filled_count() == 6

    env.execute_tool_call("place", {"piece_id": "I1", "row": r, "col": c})
    assert env.execute_tool_call("reset", {})["status"] == "success"
    assert env.game_state.filled_count() == 6
    assert env.moves == 0


def test_packing_hint_on_default_board(clock):
    env = make_env("block_logic", clock)
    env.reset()
    result = env.execute_tool_call("hint", {})
    assert result["status"] == "error"
    assert result["error"] == "NoTiling"


def test_tool_schemas_list_every_tool(clock):
    sliding = make_env("daily_15", clock)
    packing = make_env("block_logic", clock)
    def names(env):
        return {s["function"]["name"] for s in env.get_tool_schemas()}

    assert names(sliding) == {"state", "move", "ranking"}
    assert names(packing) == {"state", "select", "rotate", "click", "place", "remove", "reset", "hint"}


def test_render_packing_board(clock):
    env = make_env("block_logic", clock, render_width=120, render_height=120)
    env.reset()
    image = env.render()
    assert image.size == (120, 120)
    # top-left corner pixel is the canvas background
    assert image.getpixel((0, 0)) == env.background_color


def test_packing_snapshot_restores_board(clock):
    env = make_env("block_logic", clock)
    env.reset()
    r, c = env.game_state.empty_cells()[0]
    env.execute_tool_call("place", {"piece_id": "I1", "row": r, "col": c})
    env.execute_tool_call("select", {"piece_id": "T4"})
    saved = env.snapshot()

    env.execute_tool_call("reset", {})
    observation = env.restore(saved)
    assert observation.metadata["restored"] is True
    assert env.moves == 1
    assert env.game_state.cells_of("I1") == [(r, c)]
    assert env.game_state.selected_piece_id == "T4"
    assert env.snapshot() == saved
