"""
Session host for the daily puzzle games.

The host wires an environment to its collaborators: it restores persisted
state at start, saves after every transition, logs each step and records a
result row when a puzzle is solved. The engines themselves never touch
storage.
"""

import os
from typing import Optional

from dailypuzzles.core import Config, ENVIRONMENT_REGISTRY
from dailypuzzles.core.base import Action, Observation, SessionResult
from dailypuzzles.core.seeding import Clock, SystemClock
from dailypuzzles.environment import PuzzleEnvironment, SlidingPuzzleEnvironment
from dailypuzzles.utils.display import LiveLogger
from dailypuzzles.utils.logger import SessionLogger
from dailypuzzles.utils.storage import JsonFileStore, StateStore


class GameSession:
    """One player's session with one game mode."""

    def __init__(self, config: Config, clock: Optional[Clock] = None,
                 store: Optional[StateStore] = None, live_logger: Optional[LiveLogger] = None):
        self.config = config
        self.clock: Clock = clock or SystemClock()
        self.store: Optional[StateStore] = store
        self.live_logger = live_logger or LiveLogger(verbose=config.session.verbose)

        self.environment: Optional[PuzzleEnvironment] = None
        self.logger: Optional[SessionLogger] = None
        self.observation: Optional[Observation] = None
        self.restored: bool = False
        self._result_recorded: bool = False

    def setup(self) -> None:
        """Create the environment and collaborators."""
        self.environment = self._create_environment()
        if self.store is None:
            self.store = JsonFileStore(self.config.session.state_dir)
        self.logger = SessionLogger(
            log_dir=self.config.session.log_dir,
            session_name=self.config.game.type,
        )

    def _create_environment(self) -> PuzzleEnvironment:
        env_cls = ENVIRONMENT_REGISTRY.get(self.config.game.type)
        if env_cls is None:
            raise RuntimeError(f"Unknown or unsupported game type: {self.config.game.type}")
        return env_cls(self.config.game, clock=self.clock)

    def _validate_components(self) -> None:
        if self.environment is None or self.logger is None:
            raise RuntimeError("Session not set up. Call setup() first.")

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def start(self) -> Observation:
        """Generate the puzzle, resuming a stored one when available."""
        self._validate_components()
        self.restored = False
        self._result_recorded = False
        observation = self.environment.reset()

        key = self.environment.storage_key
        if key:
            saved = self.store.load(key)
            if saved is not None:
                try:
                    observation = self.environment.restore(saved)
                    self.restored = True
                    self.live_logger.log_info(f"Resumed saved puzzle '{key}'")
                except (KeyError, TypeError, ValueError) as exc:
                    self.live_logger.log_warning(f"Ignoring unreadable saved state '{key}': {exc}")
                    observation = self.environment.reset()
            self._persist()

        # A puzzle restored in its solved state has already been recorded
        self._result_recorded = self.environment.is_complete
        self.observation = observation
        self.logger.log_step(0, {
            "step_type": "restored" if self.restored else "initial",
            "seed": self.environment.seed,
            "description": observation.description,
            "image": observation.image,
        })
        return observation

    def apply(self, action: Action) -> Observation:
        """Apply one action, then persist, log and record completion."""
        self._validate_components()
        observation = self.environment.step(action)
        self._persist()

        tool_result = observation.metadata.get("tool_result", {})
        self.logger.log_step(observation.step, {
            "step_type": "action",
            "action": action.to_dict(),
            "tool_result": tool_result,
            "image": observation.image,
        })

        # A reset board is a fresh attempt and may be recorded again
        if action.action_type == "reset" and tool_result.get("status") == "success":
            self._result_recorded = self.environment.is_complete

        if self.environment.is_complete and not self._result_recorded:
            self._on_complete(observation)

        self.observation = observation
        return observation

    def restart(self) -> Observation:
        """Start over; blitz sessions get a new seed."""
        return self.start()

    def finish(self) -> Optional[str]:
        """Write logs and release the environment."""
        log_file = None
        if self.logger and self.config.session.save_logs:
            log_file = self.logger.save_logs()
        if self.environment:
            self.environment.close()
        return log_file

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _persist(self) -> None:
        key = self.environment.storage_key
        if key and self.environment.has_game():
            self.store.save(key, self.environment.snapshot())

    def _on_complete(self, observation: Observation) -> None:
        result = self.result()
        self._result_recorded = True
        self.logger.log_step(observation.step, {
            "step_type": "complete",
            "moves": result.moves,
            "elapsed_ms": result.elapsed_ms,
            "ranking": result.ranking,
        })
        self.live_logger.log_solved(f"Solved in {result.moves} moves" +
                                    (f" - {result.ranking}" if result.ranking else ""))
        if self.config.session.results_path:
            row = result.to_dict()
            row.pop("metadata")
            row["date"] = self.clock.today().isoformat()
            self.logger.save_results(row, os.path.abspath(self.config.session.results_path))

    def result(self) -> SessionResult:
        """Summary of the session so far."""
        self._validate_components()
        env = self.environment
        ranking = None
        if isinstance(env, SlidingPuzzleEnvironment) and env.is_complete:
            ranking = env.ranking().title
        return SessionResult(
            game_mode=self.config.game.type,
            seed=env.seed,
            puzzle_number=env.puzzle_number,
            moves=env.moves,
            elapsed_ms=env.elapsed_ms,
            success=env.is_complete,
            ranking=ranking,
            metadata={"restored": self.restored},
        )
