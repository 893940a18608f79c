"""Periodic job scheduling with fatal and non-fatal failure policies."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum

from .errors import FatalError

logger = logging.getLogger(__name__)

Step = Callable[[], Awaitable[object]]
ErrorHandler = Callable[[BaseException], None]


class SchedulerState(str, Enum):
    """Lifecycle of the scheduler."""

    CREATED = "created"
    BOOTSTRAPPING = "bootstrapping"
    RUNNING = "running"
    TERMINATED = "terminated"


def log_error(job_name: str) -> ErrorHandler:
    """Build a failure handler that logs the error and keeps the job running."""

    def handler(error: BaseException) -> None:
        logger.error(f"{job_name} failed: {error}")

    return handler


class PeriodicJob:
    """A coroutine run every ``interval`` seconds.

    The first run happens one interval after start. Every tick runs in its own
    task, so a slow run does not delay the next tick and runs may overlap.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        step: Step,
        on_error: ErrorHandler,
    ):
        """Initialize the job.

        Args:
            name: Name used in log messages
            interval: Seconds between runs
            step: Coroutine function executed on every tick
            on_error: Called with the exception when a run fails
        """
        if interval <= 0:
            raise ValueError(f"Interval of job '{name}' must be positive")
        self.name = name
        self.interval = interval
        self.step = step
        self.on_error = on_error
        self._ticker: asyncio.Task[None] | None = None
        self._runs: set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    def start(self) -> None:
        """Start ticking."""
        if self.running:
            return
        self._ticker = asyncio.create_task(self._tick(), name=f"{self.name}-ticker")

    def stop(self) -> None:
        """Stop ticking and cancel runs in flight."""
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        for run in list(self._runs):
            run.cancel()

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            run = asyncio.create_task(self._run_once(), name=f"{self.name}-run")
            self._runs.add(run)
            run.add_done_callback(self._runs.discard)

    async def _run_once(self) -> None:
        logger.debug(f"Running {self.name}")
        try:
            await self.step()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.on_error(e)


class Scheduler:
    """Drives bootstrap, the periodic jobs and the initial runs.

    ``run()`` goes through BOOTSTRAPPING (startup steps in order), RUNNING
    (jobs started, then initial steps awaited) and stays there until
    ``terminate()`` is called or a step fails, which moves it to TERMINATED
    and makes ``run()`` raise FatalError.
    """

    def __init__(
        self,
        startup: Sequence[Step] = (),
        initial: Sequence[Step] = (),
        on_ready: Callable[[], None] | None = None,
    ):
        """Initialize the scheduler.

        Args:
            startup: Steps run in order before any job starts
            initial: Steps run once, in order, right after the jobs started
            on_ready: Called once startup and initial steps have succeeded
        """
        self.startup = list(startup)
        self.initial = list(initial)
        self.on_ready = on_ready
        self.jobs: list[PeriodicJob] = []
        self.state = SchedulerState.CREATED
        self._fatal: asyncio.Future[None] | None = None

    def add_job(self, job: PeriodicJob) -> None:
        """Register a periodic job, started when the scheduler is running."""
        self.jobs.append(job)
        if self.state == SchedulerState.RUNNING:
            job.start()

    def terminate(self, error: BaseException) -> None:
        """Failure handler that stops the scheduler with a fatal error."""
        if self._fatal is not None and not self._fatal.done():
            self._fatal.set_exception(error)

    async def run(self) -> None:
        """Run until a fatal error.

        Raises:
            FatalError: When bootstrap, an initial step or a job with the
                ``terminate`` failure handler fails
        """
        self._fatal = asyncio.get_running_loop().create_future()
        try:
            self.state = SchedulerState.BOOTSTRAPPING
            for step in self.startup:
                await step()

            self.state = SchedulerState.RUNNING
            for job in self.jobs:
                job.start()

            for step in self.initial:
                await step()

            if self.on_ready is not None:
                self.on_ready()

            await self._fatal
        except asyncio.CancelledError:
            self.state = SchedulerState.TERMINATED
            raise
        except Exception as e:
            self.state = SchedulerState.TERMINATED
            logger.error(f"Unrecoverable error. Aborting due to {e}")
            raise FatalError(str(e)) from e
        finally:
            for job in self.jobs:
                job.stop()
            if self._fatal.done() and not self._fatal.cancelled():
                # Retrieve a job failure that arrived while an initial step failed
                self._fatal.exception()
