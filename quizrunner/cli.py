"""
Command Line Interface for the timed quiz runner.

Loads problems from a CSV file and runs a timed session on the terminal.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import colorama

from .config_manager import ConfigManager
from .data_manager import DataManager, QuizLoadError
from .models import Quiz
from .session_runner import Colors, SessionRunner

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.WARNING):
    """Set up logging configuration.

    Log records go to stderr so they never mix with prompts on stdout.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def non_negative_int(value: str) -> int:
    """argparse type for flags that only accept whole numbers >= 0."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="quizrunner",
        description="Timed quiz - answer the questions in a CSV file before time runs out",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default problems.csv with a 30 second limit
  quizrunner

  # Use another problem file, one minute, 10 points per correct answer
  quizrunner -filename quizzes/capitals.csv -time 60 -score 10

Problem file format:
  One problem per line, no header: question,answer
        """,
    )

    parser.add_argument(
        "-time",
        "--time",
        dest="time_limit",
        type=int,
        default=ConfigManager.DEFAULT_TIME_LIMIT,
        help="Sets the time limit to given amount in seconds (default: %(default)s)",
    )

    parser.add_argument(
        "-filename",
        "--filename",
        dest="filename",
        default=ConfigManager.DEFAULT_FILENAME,
        help="Path for the problems CSV file (default: %(default)s)",
    )

    parser.add_argument(
        "-score",
        "--score",
        dest="score_per_correct",
        type=non_negative_int,
        default=ConfigManager.DEFAULT_SCORE_PER_CORRECT,
        help="Score for each correct answer (default: %(default)s)",
    )

    return parser


def build_config(args) -> ConfigManager:
    """Apply parsed arguments to a fresh ConfigManager."""
    config_manager = ConfigManager()
    for result in (
        config_manager.set_time_limit(args.time_limit),
        config_manager.set_filename(args.filename),
        config_manager.set_score_per_correct(args.score_per_correct),
    ):
        if not result['success']:
            raise ValueError(result['user_message'])
    return config_manager


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit status: 0 when the session ends (completed or timed out),
        1 when the problem file cannot be loaded
    """
    colorama.just_fix_windows_console()

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging()

    try:
        config_manager = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    settings = config_manager.get_quiz_settings()
    logger.info(config_manager.get_settings_summary())

    data_manager = DataManager(settings.filename)
    try:
        problems = data_manager.load_problems(skip_malformed_rows=settings.skip_malformed_rows)
    except QuizLoadError as e:
        print(f"{Colors.ERROR}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1

    quiz = Quiz(problems=problems, score_per_correct=settings.score_per_correct)
    runner = SessionRunner(quiz, settings)

    try:
        result = asyncio.run(runner.run())
    except KeyboardInterrupt:
        logger.info("Quiz interrupted by user")
        print(f"\n{quiz.score_message()}")
        return 0

    logger.info(
        f"Session ended in state {result.state}: {result.correct}/{len(problems)} correct, "
        f"score {result.score}/{result.total}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
