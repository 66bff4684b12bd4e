"""Background event loop for periodic housekeeping.

Runs scheduled tasks (such as configuration polling) in a daemon thread,
independently of request handling.
"""
from datetime import timedelta
from typing import Callable, List, Optional
import heapq
from threading import Thread, Event
import logging
import time

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Represents a scheduled task in the event loop."""

    def __init__(
        self,
        run_at: float,
        callback: Callable,
        args: tuple = (),
        kwargs: dict = None,
        repeat: Optional[timedelta] = None,
        task_id: Optional[str] = None,
    ):
        """Initialize scheduled task.

        Args:
            run_at: Monotonic time at which to run the task
            callback: Function to call
            args: Positional arguments for callback
            kwargs: Keyword arguments for callback
            repeat: If set, task repeats with this interval
            task_id: Optional unique identifier
        """
        self.run_at = run_at
        self.callback = callback
        self.args = args
        self.kwargs = kwargs or {}
        self.repeat = repeat
        self.task_id = task_id

    def __lt__(self, other):
        """Compare for heap sorting."""
        return self.run_at < other.run_at


class EventLoop:
    """Periodic task runner for the almanac service."""

    def __init__(self, timer: Callable[[], float] = time.monotonic):
        """Initialize event loop.

        Args:
            timer: Source of monotonic time in seconds
        """
        self._timer = timer
        self._tasks: List[ScheduledTask] = []
        self._running = False
        self._stop_event = Event()
        self._thread: Optional[Thread] = None
        self._task_counter = 0

    def schedule_task(
        self,
        delay: timedelta,
        callback: Callable,
        args: tuple = (),
        kwargs: dict = None,
        repeat: Optional[timedelta] = None,
        task_id: Optional[str] = None,
    ) -> str:
        """Schedule a task to run after a delay.

        Args:
            delay: Time to wait before running
            callback: Function to call
            args: Positional arguments
            kwargs: Keyword arguments
            repeat: If set, repeat with this interval
            task_id: Optional task identifier

        Returns:
            Task ID
        """
        run_at = self._timer() + delay.total_seconds()
        if task_id is None:
            self._task_counter += 1
            task_id = f"task_{self._task_counter}"

        task = ScheduledTask(run_at, callback, args, kwargs, repeat, task_id)
        heapq.heappush(self._tasks, task)
        return task_id

    def schedule_interval(
        self,
        interval: timedelta,
        callback: Callable,
        args: tuple = (),
        kwargs: dict = None,
        task_id: Optional[str] = None,
        run_immediately: bool = False,
    ) -> str:
        """Schedule a task to run at regular intervals.

        Args:
            interval: Time between executions
            callback: Function to call
            args: Positional arguments
            kwargs: Keyword arguments
            task_id: Optional task identifier
            run_immediately: If True, run immediately then repeat

        Returns:
            Task ID
        """
        delay = timedelta(0) if run_immediately else interval
        return self.schedule_task(delay, callback, args, kwargs, repeat=interval, task_id=task_id)

    def cancel_task(self, task_id: str) -> bool:
        """Cancel a scheduled task.

        Args:
            task_id: The task ID to cancel

        Returns:
            True if cancelled, False if not found
        """
        # Mark for removal (actual removal happens in run_pending)
        for task in self._tasks:
            if task.task_id == task_id:
                task.task_id = None
                return True
        return False

    def run_pending(self) -> int:
        """Run every task that is due.

        Returns:
            Number of tasks executed
        """
        now = self._timer()
        executed = 0
        while self._tasks and self._tasks[0].run_at <= now:
            task = heapq.heappop(self._tasks)

            # Skip cancelled tasks
            if task.task_id is None:
                continue

            try:
                task.callback(*task.args, **task.kwargs)
                executed += 1
            except Exception as e:
                logger.error(f"Error executing task {task.task_id}: {e}")

            # A failing task keeps its schedule.
            if task.repeat:
                task.run_at = now + task.repeat.total_seconds()
                heapq.heappush(self._tasks, task)
        return executed

    def start(self) -> None:
        """Start the event loop in a background thread."""
        if self._running:
            logger.warning("Event loop already running")
            return

        self._running = True
        self._stop_event.clear()
        self._thread = Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        logger.info("Event loop started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the event loop.

        Args:
            timeout: Maximum time to wait for clean shutdown
        """
        if not self._running:
            return

        logger.info("Stopping event loop")
        self._running = False
        self._stop_event.set()

        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

        logger.info("Event loop stopped")

    def _run_loop(self) -> None:
        """Main event loop (runs in background thread)."""
        while self._running and not self._stop_event.is_set():
            try:
                self.run_pending()

                # Sleep until next task or a reasonable interval
                if self._tasks:
                    wait = self._tasks[0].run_at - self._timer()
                    if wait > 0:
                        self._stop_event.wait(min(wait, 1.0))
                else:
                    self._stop_event.wait(0.1)

            except Exception as e:
                logger.error(f"Error in event loop: {e}")
                self._stop_event.wait(0.1)

    def get_pending_tasks(self) -> int:
        """Get count of pending tasks."""
        return len([t for t in self._tasks if t.task_id is not None])

    def is_running(self) -> bool:
        """Check if event loop is running."""
        return self._running
