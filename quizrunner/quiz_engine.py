"""
Session timing for the quiz runner.
Provides the one-shot countdown that ends a session when the time limit elapses.
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class TimerLifecycleLogger:
    """Structured logging for timer lifecycle events."""

    @staticmethod
    def log_timer_start(duration: int, tick: float) -> None:
        logger.info(
            f"Timer lifecycle: COUNTDOWN_START - Duration {duration} ticks of {tick}s",
            extra={
                'event_type': 'timer_countdown_start',
                'duration': duration,
                'tick': tick,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_completion(completion_type: str, total_duration: int) -> None:
        """Log timer completion (natural expiry or cancellation)."""
        logger.info(
            f"Timer lifecycle: COMPLETED - Type {completion_type}, Duration {total_duration}",
            extra={
                'event_type': 'timer_completed',
                'completion_type': completion_type,
                'total_duration': total_duration,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_error(error_type: str, error_message: str, operation: str) -> None:
        logger.error(
            f"Timer lifecycle: ERROR - Operation {operation}, Type {error_type}: {error_message}",
            extra={
                'event_type': 'timer_error',
                'error_type': error_type,
                'error_message': error_message,
                'operation': operation,
                'timestamp': time.time()
            }
        )


class QuizTimer:
    """One-shot countdown that fires a callback when the time limit elapses."""

    def __init__(self):
        """Initialize the timer."""
        self._task: Optional[asyncio.Task] = None
        self._remaining_time = 0
        self._total_duration = 0
        self._is_cancelled = False
        self._is_expired = False

    def start(
        self,
        duration: int,
        completion_callback: Callable[[], Awaitable[Any]],
        tick: float = 1.0
    ) -> asyncio.Task:
        """
        Schedule the countdown on the running event loop.

        Args:
            duration: Number of ticks before expiry, zero or less expires at once
            completion_callback: Awaited once on natural expiry, never on cancel
            tick: Length of one tick in seconds

        Returns:
            The asyncio task running the countdown

        Raises:
            RuntimeError: If the timer is already running
        """
        if self.is_running:
            raise RuntimeError("Timer is already running")

        self._task = asyncio.create_task(
            self.start_countdown(duration, completion_callback, tick)
        )
        return self._task

    async def start_countdown(
        self,
        duration: int,
        completion_callback: Callable[[], Awaitable[Any]],
        tick: float = 1.0
    ) -> None:
        """
        Count down and await the completion callback on expiry.

        Args:
            duration: Number of ticks before expiry
            completion_callback: Called when the countdown reaches zero
            tick: Length of one tick in seconds
        """
        self._remaining_time = max(duration, 0)
        self._total_duration = self._remaining_time
        self._is_cancelled = False
        self._is_expired = False

        TimerLifecycleLogger.log_timer_start(self._total_duration, tick)

        try:
            while self._remaining_time > 0 and not self._is_cancelled:
                await asyncio.sleep(tick)
                self._remaining_time -= 1

            if self._is_cancelled:
                TimerLifecycleLogger.log_timer_completion("cancelled", self._total_duration)
                return

            self._is_expired = True
            TimerLifecycleLogger.log_timer_completion("natural_expiry", self._total_duration)
            await completion_callback()

        except asyncio.CancelledError:
            self._is_cancelled = True
            TimerLifecycleLogger.log_timer_completion("asyncio_cancelled", self._total_duration)
            raise
        except Exception as e:
            TimerLifecycleLogger.log_timer_error(
                "countdown_execution_error",
                str(e),
                "start_countdown"
            )
            raise

    def cancel(self) -> None:
        """Cancel the countdown timer."""
        self._is_cancelled = True
        if self._task and not self._task.done():
            logger.debug("Cancelling timer task")
            self._task.cancel()
        else:
            logger.debug("No active timer task to cancel")

    async def cancel_and_wait(self) -> None:
        """Cancel the countdown and wait until its task has finished."""
        self.cancel()
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_cancelled(self) -> bool:
        return self._is_cancelled

    @property
    def is_expired(self) -> bool:
        return self._is_expired

    @property
    def remaining_time(self) -> int:
        """Get remaining time in ticks."""
        return self._remaining_time
