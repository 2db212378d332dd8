"""
Interactive session runner for the quiz.
Presents problems in order, scores answers and ends on completion or timeout.
"""
import asyncio
import logging
import sys
import threading
from enum import Enum
from typing import Optional, TextIO

from colorama import Fore, Style

from .models import Problem, Quiz, QuizSettings, SessionResult
from .quiz_engine import QuizTimer

logger = logging.getLogger(__name__)


class Colors:
    """Color definitions for terminal output."""

    ERROR = Fore.RED + Style.BRIGHT
    WARNING = Fore.YELLOW + Style.BRIGHT
    INFO = Fore.BLUE + Style.BRIGHT
    RESET = Style.RESET_ALL


class SessionState(Enum):
    """Enumeration of possible session states."""
    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"
    SCORING = "scoring"
    FINISHED = "finished"
    TIMED_OUT = "timed_out"


class LineReader:
    """
    Reads lines from a blocking text stream on a daemon thread.

    Lines are handed to the event loop through an asyncio queue, so a read
    that is still blocked when the session ends never holds the process open.
    After end of input every read returns an empty string.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._queue: Optional[asyncio.Queue] = None
        self._thread: Optional[threading.Thread] = None
        self._eof = False

    def start(self) -> None:
        """Start pumping lines; must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._thread = threading.Thread(
            target=self._pump, args=(loop,), name="quiz-input", daemon=True
        )
        self._thread.start()

    def _pump(self, loop: asyncio.AbstractEventLoop) -> None:
        while True:
            try:
                line = self._stream.readline()
            except (OSError, ValueError) as e:
                logger.warning(f"Input stream failed, treating as end of input: {e}")
                line = ""

            try:
                loop.call_soon_threadsafe(self._queue.put_nowait, line)
            except RuntimeError:
                # Event loop already closed
                return

            if not line:
                return

    async def readline(self) -> str:
        """Wait for the next line, including its newline if one was read."""
        if self._eof:
            return ""
        line = await self._queue.get()
        if not line:
            self._eof = True
        return line


class SessionRunner:
    """
    Drives one quiz session on the terminal.

    The countdown runs as a separate task and signals expiry through an
    event; every answer wait races the next input line against that event.
    """

    CORRECT_MESSAGE = "Correct!"
    INCORRECT_TEMPLATE = "Incorrect answer! Correct answer was {answer}."
    TIMEOUT_MESSAGE = "Time is up!"

    def __init__(
        self,
        quiz: Quiz,
        settings: QuizSettings,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        tick: float = 1.0
    ):
        """
        Initialize the session runner.

        Args:
            quiz: Problems and running score to drive
            settings: Session settings, the time limit is read from here
            input_stream: Where answers are read from, defaults to stdin
            output_stream: Where prompts and feedback go, defaults to stdout
            tick: Seconds per time-limit unit
        """
        self.quiz = quiz
        self.settings = settings
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._tick = tick
        self._timer = QuizTimer()
        self._expired: Optional[asyncio.Event] = None

        self.state = SessionState.IDLE
        self.current_index = 0
        self.answered = 0
        self.correct = 0

    async def run(self) -> SessionResult:
        """
        Run the session to completion or timeout and print the final score.

        Returns:
            SessionResult describing how the session ended

        Raises:
            RuntimeError: If the session has already been run
        """
        if self.state is not SessionState.IDLE:
            raise RuntimeError(f"Session cannot be started from state {self.state.value}")

        self._expired = asyncio.Event()
        reader = LineReader(self._input)
        reader.start()

        logger.info(
            f"Starting session with {len(self.quiz.problems)} problems, "
            f"time limit {self.settings.time_limit}"
        )
        self._timer.start(self.settings.time_limit, self._on_time_up, tick=self._tick)

        try:
            timed_out = await self._play(reader)
        finally:
            await self._timer.cancel_and_wait()

        self._transition(SessionState.TIMED_OUT if timed_out else SessionState.FINISHED)
        self._report(timed_out)

        return SessionResult(
            score=self.quiz.score,
            total=self.quiz.total_possible,
            answered=self.answered,
            correct=self.correct,
            timed_out=timed_out,
            state=self.state.value
        )

    async def _play(self, reader: LineReader) -> bool:
        """Ask every problem in order; returns True if the time limit cut the session short."""
        for index, problem in enumerate(self.quiz.problems):
            if self._expired.is_set():
                return True

            self.current_index = index
            self._transition(SessionState.AWAITING_ANSWER)
            self._write(f"Q{index + 1}: {problem.question}? ")

            line = await self._read_answer(reader)
            if line is None:
                return True

            self._transition(SessionState.SCORING)
            self._score(problem, line.strip())

        return self._expired.is_set()

    async def _read_answer(self, reader: LineReader) -> Optional[str]:
        """Wait for one input line, or return None if time runs out first."""
        read_task = asyncio.ensure_future(reader.readline())
        expiry_task = asyncio.ensure_future(self._expired.wait())

        done, pending = await asyncio.wait(
            {read_task, expiry_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if self._expired.is_set():
            return None
        return read_task.result()

    def _score(self, problem: Problem, answer: str) -> None:
        if problem.validate_answer(answer):
            self.quiz.increment_score()
            self.correct += 1
            self._write_line(self.CORRECT_MESSAGE)
        else:
            self._write_line(self.INCORRECT_TEMPLATE.format(answer=problem.answer))
        self.answered += 1
        logger.debug(
            f"Problem {self.current_index + 1} scored, running score {self.quiz.score}"
        )

    async def _on_time_up(self) -> None:
        logger.info(f"Time limit reached at problem {self.current_index + 1}")
        self._expired.set()

    def _report(self, timed_out: bool) -> None:
        if timed_out:
            self._write("\n")
        self._write_line(self.quiz.score_message())
        if timed_out:
            self._write_line(self._colorize(self.TIMEOUT_MESSAGE, Colors.WARNING))

    def _transition(self, new_state: SessionState) -> None:
        logger.debug(
            f"Session state: {self.state.value} -> {new_state.value} "
            f"(problem {self.current_index + 1})"
        )
        self.state = new_state

    def _colorize(self, text: str, color: str) -> str:
        isatty = getattr(self._output, "isatty", None)
        if isatty is not None and isatty():
            return f"{color}{text}{Colors.RESET}"
        return text

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _write_line(self, text: str) -> None:
        self._write(text + "\n")
