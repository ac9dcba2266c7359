# Area: Content
"""
king_of_hearts._content.batch_scheduler — Rate-limited bulk generation
======================================================================

Fans generation requests out in small concurrent groups:

    requests:  [r0, r1, r2, r3, r4]      batch_size=2
    groups:    [r0, r1] -> delay -> [r2, r3] -> delay -> [r4]

Requests inside a group run on a thread pool sized to the group. The
next group never starts before every request of the previous group has
resolved. A failing request is recorded with fallback content and a
``"<topic>: <reason>"`` error string; it never aborts the batch.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..errors import BatchPartialFailure, GenerationFailure
from .models import QuestionSet
from .question_generator import (
    GenerationContext,
    GenerationResult,
    degrade_to_fallback,
)

logger = logging.getLogger("king_of_hearts.content.batch")

DEFAULT_BATCH_SIZE = 2
DEFAULT_BATCH_DELAY_SECONDS = 0.5


@dataclass(frozen=True)
class GenerationRequest:
    topic: str
    context: GenerationContext = field(default_factory=GenerationContext)


@dataclass
class BatchResult:
    """
    Aggregate outcome of a batch.

    Attributes:
        results: topic -> QuestionSet (generated or fallback)
        failures: topic -> GenerationFailure for topics that fell back
        errors: human-readable ``"<topic>: <reason>"`` strings
        groups: request indices per group, in execution order
        elapsed_seconds: wall time for the whole batch
    """
    results: Dict[str, QuestionSet] = field(default_factory=dict)
    failures: Dict[str, GenerationFailure] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    groups: List[List[int]] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def failed_topics(self) -> List[str]:
        return list(self.failures)

    @property
    def total_questions(self) -> int:
        return sum(len(qs.questions) for qs in self.results.values())

    def raise_for_failures(self) -> None:
        """Raise BatchPartialFailure if any topic fell back."""
        if self.failures:
            raise BatchPartialFailure(self.failed_topics, list(self.errors))


Worker = Callable[[str, GenerationContext], GenerationResult]


class BatchScheduler:
    """
    Runs a worker over requests in fixed-size groups.

    Args:
        worker: called as ``worker(topic, context)``; usually
                ``QuestionGenerator.try_generate_cached``
        batch_size: requests per group
        delay_seconds: pause before every group after the first
        sleep: injectable sleep function
    """

    def __init__(
        self,
        worker: Worker,
        batch_size: int = DEFAULT_BATCH_SIZE,
        delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self._worker = worker
        self._batch_size = batch_size
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    def partition(self, count: int) -> List[List[int]]:
        return [
            list(range(start, min(start + self._batch_size, count)))
            for start in range(0, count, self._batch_size)
        ]

    def run(self, requests: Sequence[GenerationRequest]) -> BatchResult:
        started = time.monotonic()
        batch = BatchResult()
        groups = self.partition(len(requests))

        logger.info(
            f"Generating {len(requests)} topic(s) in {len(groups)} group(s) "
            f"of up to {self._batch_size}"
        )

        for group_number, indices in enumerate(groups):
            if group_number > 0 and self._delay_seconds > 0:
                self._sleep(self._delay_seconds)

            logger.debug(f"Starting group {group_number + 1}/{len(groups)}: {indices}")
            with ThreadPoolExecutor(max_workers=len(indices)) as executor:
                futures = [
                    (requests[i], executor.submit(self._worker, requests[i].topic, requests[i].context))
                    for i in indices
                ]
                for request, future in futures:
                    self._collect(batch, request, future)
            batch.groups.append(indices)

        batch.elapsed_seconds = time.monotonic() - started
        logger.info(
            f"Batch complete: {len(batch.results)} topic(s), "
            f"{batch.total_questions} question(s), {len(batch.failures)} fallback(s) "
            f"in {batch.elapsed_seconds:.2f}s"
        )
        return batch

    def _collect(self, batch: BatchResult, request: GenerationRequest, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                f"Worker crashed for '{request.topic}': {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
                extra={"topic": request.topic},
            )
            result = GenerationResult(
                request.topic, failure=GenerationFailure(request.topic, str(exc) or type(exc).__name__)
            )
        else:
            result = future.result()

        if result.question_set is not None:
            batch.results[request.topic] = result.question_set
        else:
            batch.results[request.topic] = degrade_to_fallback(result)
        if result.failure is not None:
            batch.failures[request.topic] = result.failure
            batch.errors.append(f"{request.topic}: {result.failure.reason}")


def build_requests(
    topics: Sequence[str],
    player_name: str = "",
    expert_names: Optional[Dict[str, str]] = None,
) -> List[GenerationRequest]:
    """One request per topic, keyed with the given player and per-topic expert."""
    expert_names = expert_names or {}
    return [
        GenerationRequest(topic, GenerationContext(player_name, expert_names.get(topic, "")))
        for topic in topics
    ]
