"""
Parallel batches with per-item failure isolation.

Each item runs as its own task; a failing item is captured and logged
and never cancels its siblings. Callers merge whatever succeeded once
the whole batch has joined.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Generic, List, Sequence, Tuple, TypeVar

from eventarchitect.core.logging import log_context
from eventarchitect.domain.workflow.outcome import ItemFailure
from eventarchitect.llm.models import LLMException

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class BatchResult(Generic[T]):
    """Successes keep their original index so callers can preserve order."""
    successes: List[Tuple[int, T]] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)

    @property
    def values(self) -> List[T]:
        return [value for _, value in self.successes]

    @property
    def all_failed(self) -> bool:
        return not self.successes


def _error_type(error: BaseException) -> str:
    if isinstance(error, LLMException):
        return error.error.error_type
    return type(error).__name__


async def _in_item_context(item: Awaitable[T], batch_name: str, label: str) -> T:
    with log_context(batch=batch_name, item=label):
        return await item


async def run_isolated(
    items: Sequence[Awaitable[T]],
    labels: Sequence[str],
    batch_name: str,
) -> BatchResult[T]:
    """
    Await every item concurrently, capturing failures per item.

    Each item runs with its batch and label bound to the log context.
    Only Exception subclasses are captured; cancellation propagates.
    """
    if len(items) != len(labels):
        raise ValueError(f"{batch_name}: {len(items)} items but {len(labels)} labels")
    results = await asyncio.gather(
        *(_in_item_context(item, batch_name, label) for item, label in zip(items, labels)),
        return_exceptions=True,
    )

    batch: BatchResult[T] = BatchResult()
    for index, (label, result) in enumerate(zip(labels, results)):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning(
                f"{batch_name}: item {index} ({label}) failed: {result}",
                extra={"batch": batch_name, "item": label, "item_index": index},
            )
            batch.failures.append(ItemFailure(
                index=index,
                label=label,
                error_type=_error_type(result),
                message=str(result),
            ))
        else:
            batch.successes.append((index, result))
    return batch


async def gather_all(*items: Awaitable[T]) -> List[T]:
    """
    Await every item concurrently and fail if any failed.

    Unlike a plain gather, every sibling runs to completion before the
    first error is raised, so nothing is left running in the background.
    """
    results = await asyncio.gather(*items, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
