"""Abortable batch job execution.

A job run walks a lazily produced sequence of work items, checking for a
cooperative abort request between items. Per-item failures are counted and
the batch continues; a failure of the driving loop itself (the item
producer, or the abort check) stops the run with ERROR.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from .errors import JobRunFinishedError
from .outcome import JobStatus
from .result import ErrorKind, capture

T = TypeVar("T")

AbortCheck = Callable[[], bool]


class BatchJob(Protocol[T]):
    """A unit of batch work driven by the JobRunner.

    `items()` is called once per run, lazily, inside the runner's guarded
    loop. Jobs with `abortable = False` run to completion regardless of
    abort requests.
    """

    name: str
    abortable: bool

    def items(self) -> Iterable[T]: ...

    def process(self, item: T) -> Any: ...


class JobRunRecord(BaseModel):
    """Serialisable snapshot of a finished run, for the scheduler to archive."""

    job_name: str
    status: JobStatus
    processed: int
    failed: int
    started_at: datetime
    finished_at: datetime

    error: str | None = None


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class JobRun:
    """Counters and terminal status of one job execution.

    `processed` counts attempted items, not successful ones. Every attribute
    is read-only; the runner advances a run through `record_attempt` and
    `finish`, and nothing changes once it has finished.
    """

    __slots__ = (
        "_job_name",
        "_processed",
        "_failed",
        "_error",
        "_started_at",
        "_finished_at",
        "_status",
    )

    def __init__(self, job_name: str, *, started_at: datetime | None = None) -> None:
        self._job_name = job_name
        self._processed = 0
        self._failed = 0
        self._error: str | None = None
        self._started_at = started_at or _utc_now()
        self._finished_at: datetime | None = None
        self._status: JobStatus | None = None

    def __repr__(self) -> str:
        return (
            f"JobRun(job_name={self._job_name!r}, processed={self._processed}, "
            f"failed={self._failed}, status={self._status})"
        )

    @property
    def job_name(self) -> str:
        return self._job_name

    @property
    def processed(self) -> int:
        return self._processed

    @property
    def failed(self) -> int:
        return self._failed

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def finished_at(self) -> datetime | None:
        return self._finished_at

    @property
    def status(self) -> JobStatus | None:
        return self._status

    @property
    def finished(self) -> bool:
        return self._status is not None

    @property
    def succeeded(self) -> int:
        return self._processed - self._failed

    def record_attempt(self, *, ok: bool) -> None:
        if self.finished:
            raise JobRunFinishedError(f"Job run {self._job_name!r} is already finished")
        self._processed += 1
        if not ok:
            self._failed += 1

    def status_from_counts(self) -> JobStatus:
        if self._failed == 0:
            return JobStatus.SUCCESS
        if self._failed < self._processed:
            return JobStatus.WARNING
        return JobStatus.ERROR

    def finish(self, status: JobStatus, *, error: str | None = None) -> None:
        if self.finished:
            raise JobRunFinishedError(
                f"Job run {self._job_name!r} already finished with {self._status}"
            )
        self._status = status
        self._error = error
        self._finished_at = _utc_now()

    def to_record(self) -> JobRunRecord:
        if self._status is None or self._finished_at is None:
            raise JobRunFinishedError(f"Job run {self._job_name!r} has not finished yet")
        return JobRunRecord(
            job_name=self._job_name,
            status=self._status,
            processed=self._processed,
            failed=self._failed,
            started_at=self._started_at,
            finished_at=self._finished_at,
            error=self._error,
        )


class JobRunner:
    """Drive batch jobs one item at a time.

    The runner holds no per-run state, so one instance can serve many
    concurrent runs on threads the caller owns.
    """

    def __init__(
        self,
        *,
        progress_log_interval: int = 0,
        logger: logging.Logger | None = None,
    ) -> None:
        if progress_log_interval < 0:
            raise ValueError("progress_log_interval must be >= 0")
        self._progress_log_interval = progress_log_interval
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Any, *, logger: logging.Logger | None = None) -> JobRunner:
        return cls(progress_log_interval=settings.progress_log_interval, logger=logger)

    def perform(self, job: BatchJob[T], abort_check: AbortCheck | None = None) -> JobRun:
        """Run a BatchJob. Non-abortable jobs ignore `abort_check`."""

        def produce() -> Iterator[T]:
            yield from job.items()

        item_key = getattr(job, "item_key", None)
        return self.run(
            produce(),
            job.process,
            abort_check if job.abortable else None,
            job_name=job.name,
            item_key=item_key,
        )

    def run(
        self,
        items: Iterable[T],
        process_one: Callable[[T], Any],
        abort_check: AbortCheck | None = None,
        *,
        job_name: str = "job",
        item_key: Callable[[T], object] | None = None,
    ) -> JobRun:
        """Process `items` in order and return the finished JobRun.

        Never raises for item, producer or abort-check failures.
        """

        run = JobRun(job_name=job_name)
        self._logger.info("Starting job", extra={"job": job_name})

        try:
            for item in items:
                if abort_check is not None and abort_check():
                    run.finish(JobStatus.ABORTED)
                    self._logger.info(
                        "Job aborted by request",
                        extra={"job": job_name, "processed": run.processed, "failed": run.failed},
                    )
                    return run

                outcome = capture(process_one, item, kind=ErrorKind.ITEM_FAILURE)
                if not outcome.ok:
                    self._logger.error(
                        "Error processing item",
                        exc_info=outcome.error,
                        extra={
                            "job": job_name,
                            "item": self._describe(item, item_key),
                            "error_kind": ErrorKind.ITEM_FAILURE.value,
                            "reason": outcome.message,
                        },
                    )
                run.record_attempt(ok=outcome.ok)
                self._log_progress(run)
        except Exception as exc:
            run.finish(JobStatus.ERROR, error=str(exc) or type(exc).__name__)
            self._logger.exception(
                "Job failed with unexpected error",
                extra={
                    "job": job_name,
                    "processed": run.processed,
                    "failed": run.failed,
                    "error_kind": ErrorKind.DRIVER_FAILURE.value,
                },
            )
            return run

        run.finish(run.status_from_counts())
        self._logger.info(
            "Job completed",
            extra={
                "job": job_name,
                "processed": run.processed,
                "failed": run.failed,
                "status": run.status.value if run.status else None,
            },
        )
        return run

    def _log_progress(self, run: JobRun) -> None:
        interval = self._progress_log_interval
        if interval and run.processed % interval == 0:
            self._logger.info(
                "Job progress",
                extra={"job": run.job_name, "processed": run.processed, "failed": run.failed},
            )

    @staticmethod
    def _describe(item: object, item_key: Callable[[Any], object] | None) -> object:
        if item_key is not None:
            key = capture(item_key, item)
            if key.ok:
                return key.value
        shown = capture(repr, item)
        return shown.value if shown.ok else type(item).__name__
