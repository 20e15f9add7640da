"""Directory mode: convert every file of a directory on a fixed-size thread pool.

Each file becomes a ``ConversionJob``; every job yields exactly one ``JobOutcome``.
Decode and encode failures are recorded in the outcome and never stop sibling
jobs. Any other exception raised by a worker is fatal for the whole batch.
"""

import enum
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from asciicanvas.errors import DirectoryError, ImageError

log = logging.getLogger(__name__)

DEFAULT_WORKERS = 5
OUTPUT_SUFFIX = "_ascii"


class JobState(enum.Enum):
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionJob:
    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class JobOutcome:
    input_path: Path
    output_path: Path
    error: ImageError | None = None

    @property
    def state(self) -> JobState:
        return JobState.FAILED if self.error is not None else JobState.SUCCEEDED

    @property
    def succeeded(self) -> bool:
        return self.error is None


def derive_output_path(input_path: str | Path, output_dir: str | Path, suffix: str = OUTPUT_SUFFIX) -> Path:
    """``<output_dir>/<stem><suffix><ext>`` for an input file."""
    input_path = Path(input_path)
    return Path(output_dir) / f"{input_path.stem}{suffix}{input_path.suffix}"


def ensure_output_dir(path: str | Path) -> Path:
    path = Path(path)
    if path.is_dir():
        return path
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"failed to create directory '{path}': {exc}") from exc
    log.info("created output directory '%s'", path)
    return path


def discover_jobs(input_dir: str | Path, output_dir: str | Path, suffix: str = OUTPUT_SUFFIX) -> list[ConversionJob]:
    """One job per regular entry of ``input_dir``. Subdirectories are skipped, not descended into."""
    input_dir = Path(input_dir)
    try:
        entries = sorted(input_dir.iterdir())
    except OSError as exc:
        raise DirectoryError(f"failed to read input directory '{input_dir}': {exc}") from exc
    return [
        ConversionJob(entry, derive_output_path(entry, output_dir, suffix)) for entry in entries if not entry.is_dir()
    ]


def _run_job(job: ConversionJob, process: Callable[[Path, Path], Path]) -> JobOutcome:
    log.debug("%s: %s", JobState.RUNNING.value, job.input_path)
    try:
        output_path = process(job.input_path, job.output_path)
    except ImageError as exc:
        return JobOutcome(job.input_path, job.output_path, exc)
    return JobOutcome(job.input_path, Path(output_path))


def run_batch(
    jobs: Iterable[ConversionJob],
    process: Callable[[Path, Path], Path],
    workers: int = DEFAULT_WORKERS,
    on_outcome: Callable[[JobOutcome], None] | None = None,
) -> list[JobOutcome]:
    """Run ``process(input_path, output_path)`` for every job on ``workers`` threads.

    Returns one outcome per job in completion order. ``on_outcome`` is called on
    the calling thread as each outcome arrives.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    jobs = list(jobs)
    outcomes: list[JobOutcome] = []
    if not jobs:
        return outcomes

    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="asciicanvas")
    try:
        futures: list[Future[JobOutcome]] = [pool.submit(_run_job, job, process) for job in jobs]
        log.debug("%s: %d jobs on %d workers", JobState.QUEUED.value, len(futures), workers)
        for future in as_completed(futures):
            outcome = future.result()
            log.debug("%s: %s", outcome.state.value, outcome.input_path)
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
    except BaseException:
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return outcomes


def format_outcome(outcome: JobOutcome) -> str:
    if outcome.succeeded:
        return f"processed '{outcome.input_path}' -> wrote new image to '{outcome.output_path}'"
    return f"failed to process image '{outcome.input_path}': {outcome.error.action} error: {outcome.error.reason}"
