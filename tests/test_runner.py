import os
from datetime import date

import pytest

from dailypuzzles.core.base import Action
from dailypuzzles.core.seeding import FixedClock
from dailypuzzles.packing import find_tiling
from dailypuzzles.runner import GameSession
from dailypuzzles.sliding import neighbors
from dailypuzzles.utils.logger import load_results, summarize_results

DAILY_KEY = "daily_15_20251018"


def start_session(config, clock, store, quiet):
    session = GameSession(config, clock=clock, store=store, live_logger=quiet)
    session.setup()
    session.start()
    return session


def legal_move(session):
    state = session.environment.game_state
    return Action("move", {"index": neighbors(state.size, state.empty_index)[0]})


def test_daily_progress_is_saved_and_resumed(make_config, clock, store, quiet):
    config = make_config()
    first = start_session(config, clock, store, quiet)
    assert not first.restored
    assert store.load(DAILY_KEY)["moves"] == 0

    first.apply(legal_move(first))
    saved = store.load(DAILY_KEY)
    assert saved["moves"] == 1

    second = start_session(config, clock, store, quiet)
    assert second.restored
    assert second.environment.game_state.moves == 1
    assert second.environment.game_state.grid == saved["grid"]


def test_new_day_starts_a_new_board(make_config, clock, store, quiet):
    config = make_config()
    first = start_session(config, clock, store, quiet)
    first.apply(legal_move(first))

    clock.advance(24 * 60 * 60 * 1000)
    second = start_session(config, clock, store, quiet)
    assert not second.restored
    assert second.environment.seed == 20251019
    assert set(store.data) == {DAILY_KEY, "daily_15_20251019"}


def test_blitz_is_never_saved(make_config, clock, store, quiet):
    session = start_session(make_config(type="quick_blitz"), clock, store, quiet)
    session.apply(legal_move(session))
    assert store.data == {}


def test_block_logic_is_never_saved(make_config, clock, store, quiet):
    session = start_session(make_config(type="block_logic"), clock, store, quiet)
    session.apply(Action("select", {"piece_id": "I4"}))
    assert store.data == {}


def test_unreadable_saved_state_is_replaced(make_config, clock, store, quiet):
    store.save(DAILY_KEY, {"bogus": 1})
    session = start_session(make_config(), clock, store, quiet)
    assert not session.restored
    assert "grid" in store.load(DAILY_KEY)


def test_completion_records_one_result(make_config, clock, store, quiet, tmp_path):
    config = make_config(shuffle_moves=1)
    session = start_session(config, clock, store, quiet)

    observation = session.apply(Action("move", {"index": 15}))
    assert observation.metadata["tool_result"]["message"] == "Puzzle solved"
    result = session.result()
    assert result.success
    assert result.moves == 1
    assert result.ranking == "Grandmaster"
    assert result.puzzle_number == 29

    rejected = session.apply(Action("move", {"index": 14}))
    assert rejected.metadata["tool_result"]["error"] == "PuzzleComplete"

    # A solved board restored later is not recorded again
    start_session(config, clock, store, quiet)

    df = load_results(str(tmp_path / "results.csv"))
    assert len(df) == 1
    row = df.iloc[0]
    assert row["game_mode"] == "daily_15"
    assert row["seed"] == 20251018
    assert bool(row["success"])
    assert row["ranking"] == "Grandmaster"
    assert row["date"] == "2025-10-18"

    summary = summarize_results(df)
    assert summary.loc[0, "solved"] == 1
    assert summary.loc[0, "best_moves"] == 1


def test_finish_writes_logs(make_config, clock, store, quiet):
    session = start_session(make_config(type="quick_blitz"), clock, store, quiet)
    session.apply(Action("move", {"index": 100}))
    log_file = session.finish()
    assert log_file and os.path.exists(log_file)
    summary = os.path.join(os.path.dirname(log_file), "summary.txt")
    with open(summary) as f:
        text = f.read()
    assert "Actions Taken: 1" in text
    assert "Actions Rejected: 1" in text


def test_apply_before_setup(make_config, clock):
    session = GameSession(make_config(), clock=clock)
    with pytest.raises(RuntimeError, match="setup"):
        session.apply(Action("state"))


def solve_with_hint_steps(session, now_step=1000):
    steps = find_tiling(session.environment.game_state)
    assert steps is not None
    for step in steps:
        session.apply(Action("select", {"piece_id": step.piece_id}))
        for _ in range(step.turns):
            session.apply(Action("rotate"))
        session.clock.advance(now_step)
        session.apply(Action("place", {"piece_id": step.piece_id, "row": step.row, "col": step.col}))
    assert session.environment.is_complete


def test_reset_after_solving_records_the_next_solve(make_config, store, quiet, tmp_path):
    clock = FixedClock(date(2025, 12, 1), now_ms=1_000_000)
    session = start_session(make_config(type="block_logic", num_blockers=7), clock, store, quiet)

    solve_with_hint_steps(session)
    observation = session.apply(Action("reset"))
    assert observation.metadata["tool_result"]["status"] == "success"
    assert not session.environment.is_complete
    solve_with_hint_steps(session)

    df = load_results(str(tmp_path / "results.csv"))
    assert len(df) == 2
    assert list(df["game_mode"]) == ["block_logic", "block_logic"]
    assert df["success"].all()


def test_rejected_reset_does_not_rerecord(make_config, clock, store, quiet, tmp_path):
    session = start_session(make_config(shuffle_moves=1), clock, store, quiet)
    session.apply(Action("move", {"index": 15}))
    session.apply(Action("reset"))
    session.apply(Action("move", {"index": 14}))
    assert len(load_results(str(tmp_path / "results.csv"))) == 1
