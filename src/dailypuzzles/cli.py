"""
Command-line interface for dailypuzzles.

Play the daily puzzles in a terminal, inspect or render a given day's board,
search Block Logic boards for a complete tiling, and manage configuration
files and recorded results.
"""

import argparse
import sys
from datetime import date
from typing import Dict, List, Optional

from dailypuzzles.core.base import Action, GameMode
from dailypuzzles.core.config import Config, GameConfig, load_config, create_default_config, validate_config
from dailypuzzles.core.registry import ENVIRONMENT_REGISTRY
from dailypuzzles.core.seeding import Clock, PinnedDateClock, SystemClock, daily_seed
from dailypuzzles.evaluation.ranking import format_time
from dailypuzzles.packing import create_game_state as create_packing_state, find_tiling
from dailypuzzles.runner import GameSession
from dailypuzzles.utils.display import StatusDisplay, LiveLogger
from dailypuzzles.utils.logger import load_results, summarize_results

GAME_TITLES = {
    GameMode.DAILY_15.value: "The Fifteen",
    GameMode.QUICK_BLITZ.value: "Quick Blitz",
    GameMode.BLOCK_LOGIC.value: "Block Logic",
}

SLIDING_HELP = """Commands:
  move <index> | move <row> <col>   slide a tile into the empty cell (m for short)
  ranking                           show the ranking for the current move count
  state                             show the board
  new                               start over (Quick Blitz deals a new board)
  quit                              leave (daily progress is saved)"""

PACKING_HELP = """Commands:
  select <piece>                    select a piece; select it again to rotate it
  rotate                            rotate the selected piece
  click <row> <col>                 remove the piece there, or place the selected piece
  place <piece> <row> <col>         place a piece with its first cell on (row, col)
  remove <piece>                    lift a placed piece off the board
  hint                              look for a way to fill the rest of the board
  reset                             restart today's board
  state                             show the board
  quit                              leave"""


def _ints(tokens: List[str]) -> List[int]:
    return [int(t) for t in tokens]


def parse_command(line: str, game_type: str) -> Optional[Action]:
    """
    Translate a line typed at the prompt into an Action.

    Returns None for blank or unrecognised input; raises ValueError for
    recognised commands with malformed arguments.
    """
    tokens = line.strip().split()
    if not tokens:
        return None
    command, args = tokens[0].lower(), tokens[1:]

    if command == "state":
        return Action("state")

    if game_type in (GameMode.DAILY_15.value, GameMode.QUICK_BLITZ.value):
        if command in ("m", "move"):
            numbers = _ints(args)
            if len(numbers) == 1:
                return Action("move", {"index": numbers[0]})
            if len(numbers) == 2:
                return Action("move", {"row": numbers[0], "col": numbers[1]})
            raise ValueError("move takes an index or a row and column")
        if command == "ranking":
            return Action("ranking")
        return None

    if command in ("s", "select") and len(args) == 1:
        return Action("select", {"piece_id": args[0].upper()})
    if command in ("r", "rotate"):
        return Action("rotate")
    if command in ("c", "click"):
        row, col = _ints(args)
        return Action("click", {"row": row, "col": col})
    if command in ("p", "place"):
        if len(args) != 3:
            raise ValueError("place takes a piece id, a row and a column")
        row, col = _ints(args[1:])
        return Action("place", {"piece_id": args[0].upper(), "row": row, "col": col})
    if command == "remove" and len(args) == 1:
        return Action("remove", {"piece_id": args[0].upper()})
    if command in ("hint", "reset"):
        return Action(command)
    return None


def get_available_games() -> List[str]:
    """Get registered game modes."""
    # Import environments to trigger registration
    import dailypuzzles.environment  # noqa: F401
    return list(ENVIRONMENT_REGISTRY.keys())


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    games = get_available_games()

    parser = argparse.ArgumentParser(
        description="dailypuzzles: deterministic daily sliding-tile and packing puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Play today's Fifteen
  dailypuzzles play --game daily_15

  # Replay a past Block Logic board
  dailypuzzles play --game block_logic --date 2025-12-01

  # Render a board to PNG
  dailypuzzles render --game daily_15 --output fifteen.png

  # Check whether a day's Block Logic board can be filled
  dailypuzzles solve --date 2025-12-01 --blockers 7

  # Summarize recorded results
  dailypuzzles results

Available Games: {', '.join(games) if games else 'None registered'}
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_game_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", "-c", help="Path to configuration file")
        p.add_argument("--game", "-g", choices=games, default=GameMode.DAILY_15.value, help="Game mode")
        p.add_argument("--date", help="Calendar date to play (YYYY-MM-DD), defaults to today")

    play_parser = subparsers.add_parser("play", help="Play a puzzle in the terminal")
    add_game_args(play_parser)
    play_parser.add_argument("--state-dir", help="Override saved-state directory")
    play_parser.add_argument("--quiet", "-q", action="store_true", help="Only print boards and errors")

    show_parser = subparsers.add_parser("show", help="Print a day's starting board")
    add_game_args(show_parser)

    render_parser = subparsers.add_parser("render", help="Render a day's starting board to an image")
    add_game_args(render_parser)
    render_parser.add_argument("--output", "-o", required=True, help="Output image path")

    solve_parser = subparsers.add_parser("solve", help="Search a Block Logic board for a complete tiling")
    solve_parser.add_argument("--date", help="Calendar date (YYYY-MM-DD), defaults to today")
    solve_parser.add_argument("--blockers", type=int, default=6, help="Number of blockers to draw")

    results_parser = subparsers.add_parser("results", help="Summarize recorded results")
    results_parser.add_argument("--path", default="results.csv", help="Results CSV file")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--game", "-g", choices=games, default=GameMode.DAILY_15.value, help="Game mode")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    subparsers.add_parser("list-games", help="List available games")

    return parser


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


def _clock_for(args) -> Clock:
    day = _parse_date(getattr(args, "date", None))
    return PinnedDateClock(day) if day else SystemClock()


def _build_config(args) -> Config:
    if getattr(args, "config", None):
        return load_config(args.config)
    return Config(game=GameConfig.from_dict({"type": args.game}))


def _create_session(args, verbose: bool) -> GameSession:
    config = _build_config(args)
    if getattr(args, "state_dir", None):
        config.session.state_dir = args.state_dir
    config.session.verbose = verbose
    session = GameSession(config, clock=_clock_for(args), live_logger=LiveLogger(verbose=verbose))
    session.setup()
    return session


def play_command(args) -> int:
    """Interactive play loop."""
    logger = LiveLogger(verbose=not args.quiet)
    try:
        session = _create_session(args, verbose=not args.quiet)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.log_error(f"Could not start game: {e}")
        return 1

    game_type = session.config.game.type
    help_text = PACKING_HELP if game_type == GameMode.BLOCK_LOGIC.value else SLIDING_HELP
    StatusDisplay.print_header(GAME_TITLES.get(game_type, game_type))
    observation = session.start()
    StatusDisplay.print_board(observation.description)
    print(help_text)

    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            command = line.strip().lower()
            if command in ("q", "quit", "exit"):
                break
            if command in ("h", "help", "?"):
                print(help_text)
                continue
            if command == "new":
                observation = session.restart()
                StatusDisplay.print_board(observation.description)
                continue

            try:
                action = parse_command(line, game_type)
            except ValueError as e:
                logger.log_error(str(e))
                continue
            if action is None:
                if command:
                    logger.log_warning(f"Unknown command '{line.strip()}' (type 'help')")
                continue

            logger.log_action(action.action_type, ", ".join(f"{k}={v}" for k, v in action.parameters.items()))
            observation = session.apply(action)
            result = observation.metadata.get("tool_result", {})
            if result.get("status") == "success":
                logger.log_result(result.get("message", "OK"))
                if action.action_type == "hint":
                    for step in result.get("steps", []):
                        print(f"  {step['piece_id']}: rotate {step['turns']}x, anchor at ({step['row']}, {step['col']})")
            else:
                logger.log_result(result.get("message", "Rejected"), success=False)
            StatusDisplay.print_board(observation.description)
    except KeyboardInterrupt:
        logger.log_warning("Interrupted")
    finally:
        log_file = session.finish()
        if log_file:
            logger.log_info(f"Session log saved to: {log_file}")

    summary = session.result()
    StatusDisplay.print_results({
        "Game": GAME_TITLES.get(summary.game_mode, summary.game_mode),
        "Puzzle No.": summary.puzzle_number if summary.puzzle_number is not None else "-",
        "Moves": summary.moves,
        "Time": format_time(summary.elapsed_ms),
        "Solved": summary.success,
        "Ranking": summary.ranking or "-",
    }, "Session")
    return 0


def show_command(args) -> int:
    """Print the starting board for a day."""
    logger = LiveLogger()
    try:
        config = _build_config(args)
        clock = _clock_for(args)
    except (FileNotFoundError, ValueError) as e:
        logger.log_error(f"Configuration error: {e}")
        return 1
    env = ENVIRONMENT_REGISTRY[config.game.type](config.game, clock=clock)
    observation = env.reset()
    StatusDisplay.print_header(GAME_TITLES.get(config.game.type, config.game.type))
    StatusDisplay.print_board(observation.description)
    StatusDisplay.print_config({"Seed": env.seed, "Puzzle No.": env.puzzle_number}, "Puzzle")
    return 0


def render_command(args) -> int:
    """Render the starting board for a day."""
    logger = LiveLogger()
    try:
        config = _build_config(args)
        env = ENVIRONMENT_REGISTRY[config.game.type](config.game, clock=_clock_for(args))
        observation = env.reset()
        observation.image.save(args.output)
    except (FileNotFoundError, ValueError, OSError) as e:
        logger.log_error(f"Failed to render board: {e}")
        return 1
    logger.log_result(f"Board saved to {args.output}")
    return 0


def solve_command(args) -> int:
    """Search a Block Logic board for a complete tiling."""
    logger = LiveLogger()
    try:
        day = _parse_date(args.date) or SystemClock().today()
        state = create_packing_state(daily_seed(day), num_blockers=args.blockers)
    except ValueError as e:
        logger.log_error(str(e))
        return 1

    StatusDisplay.print_header(f"Block Logic {day.isoformat()} ({args.blockers} blockers)")
    steps = find_tiling(state)
    if steps is None:
        free = len(state.empty_cells())
        capacity = sum(p.size for p in state.pieces)
        logger.log_warning(f"No complete tiling: {free} free cells, pieces cover {capacity}")
        return 2

    logger.log_result(f"Tiling found with {len(steps)} placements")
    for step in steps:
        print(f"  {step.piece_id}: rotate {step.turns}x, anchor at ({step.row}, {step.col})")
    return 0


def results_command(args) -> int:
    """Summarize recorded results."""
    df = load_results(args.path)
    if df.empty:
        LiveLogger().log_info(f"No results recorded in {args.path}")
        return 0
    summary = summarize_results(df)
    StatusDisplay.print_section("Results by game")
    print(summary.to_string(index=False))
    return 0


def create_config_command(args) -> int:
    """Write a default configuration file."""
    logger = LiveLogger()
    try:
        config = create_default_config(args.output, args.game)
    except OSError as e:
        logger.log_error(f"Failed to write configuration: {e}")
        return 1
    logger.log_result(f"Configuration written to {args.output}")
    StatusDisplay.print_config(config.game.to_dict(), "Game")
    return 0


def validate_config_command(args) -> int:
    """Validate a configuration file."""
    logger = LiveLogger()
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        logger.log_info("Use 'dailypuzzles create-config' to create a default configuration")
        return 1
    except Exception as e:
        logger.log_error(f"Configuration error: {e}")
        return 1

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    for error in errors:
        logger.log_error(error.replace("ERROR: ", ""))
    for warning in warnings:
        logger.log_warning(warning.replace("WARNING: ", ""))

    if errors or (args.strict and warnings):
        return 1
    logger.log_result("Configuration is valid")
    return 0


def list_games_command(args) -> int:
    """List registered games."""
    StatusDisplay.print_section("Available games")
    for name, env_cls in ENVIRONMENT_REGISTRY.items():
        print(f"  {name:<14} {GAME_TITLES.get(name, ''):<14} ({env_cls.__name__})")
    return 0


COMMANDS: Dict[str, object] = {
    "play": play_command,
    "show": show_command,
    "render": render_command,
    "solve": solve_command,
    "results": results_command,
    "create-config": create_config_command,
    "validate-config": validate_config_command,
    "list-games": list_games_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
