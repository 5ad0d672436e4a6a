"""Node contract: prepare -> execute -> finalize, with per-node retry.

A node activation runs its three phases strictly in order:

- prepare(state): read what execute needs from the shared state. Must not
  mutate the state.
- execute(prepared): the unit of work (extraction, LLM call, ...). Never
  sees the shared state. Must be safe to call repeatedly with the same
  input, because the retry loop may call it up to ``retry.max_attempts``
  times.
- finalize(state, prepared, result): the only phase allowed to write the
  shared state. Returns the outcome label used for routing.

Only execute is retried. Exceptions escaping any phase are wrapped in
NodeExecutionError carrying the node name and phase.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from core.flow.errors import BatchItemError, NodeExecutionError

logger = logging.getLogger(__name__)

DEFAULT_ACTION = "default"


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings for a node's execute phase.

    max_attempts is the TOTAL number of tries, so max_attempts=3 means one
    call plus up to two retries. wait is a fixed delay in seconds between
    attempts; there is no wait after the final attempt.
    """

    max_attempts: int = 1
    wait: float = 0.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.wait < 0:
            raise ValueError("wait must be >= 0")


@dataclass
class ExecutionRecord:
    """What happened during one node activation."""

    node: str
    action: Optional[str] = None
    attempts: int = 0
    waited: float = 0.0
    used_fallback: bool = False
    items: Optional[int] = None


class Node:
    """Atomic unit of work in a flow.

    Subclasses override prepare/execute/finalize. Successors are registered
    with next() for the unconditional "default" edge or on() for labelled
    branches; both return the successor so chains read left to right:

        detector.on("url", extractor)
        extractor.next(capture).next(distill)
    """

    def __init__(self, name: Optional[str] = None, retry: Optional[RetryPolicy] = None):
        self.name = name or type(self).__name__
        self.retry = retry or RetryPolicy()
        self.successors: dict[str, "Node"] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    def next(self, node: "Node", action: str = DEFAULT_ACTION) -> "Node":
        """Register ``node`` as the successor for ``action``."""
        if action in self.successors:
            logger.warning(
                f"{self.name}: overwriting successor for '{action}' "
                f"({self.successors[action].name} -> {node.name})"
            )
        self.successors[action] = node
        return node

    def on(self, action: str, node: "Node") -> "Node":
        """Register a labelled branch. Same as next(node, action)."""
        return self.next(node, action)

    async def prepare(self, state: Any) -> Any:
        return None

    async def execute(self, prepared: Any) -> Any:
        return None

    async def execute_fallback(self, prepared: Any, error: Exception) -> Any:
        """Called once all attempts failed. Default: propagate the error."""
        raise error

    async def finalize(self, state: Any, prepared: Any, result: Any) -> Optional[str]:
        return DEFAULT_ACTION

    async def _execute_with_retry(self, prepared: Any, record: ExecutionRecord) -> Any:
        max_attempts = self.retry.max_attempts
        for attempt in range(1, max_attempts + 1):
            record.attempts += 1
            try:
                return await self.execute(prepared)
            except Exception as e:
                if attempt == max_attempts:
                    if max_attempts > 1:
                        logger.warning(
                            f"{self.name}: all {max_attempts} attempts failed, "
                            f"last error: {e}"
                        )
                    result = await self.execute_fallback(prepared, e)
                    record.used_fallback = True
                    logger.info(f"{self.name}: using fallback result")
                    return result

                logger.warning(
                    f"{self.name}: attempt {attempt}/{max_attempts} failed, "
                    f"retrying in {self.retry.wait}s: {e}"
                )
                if self.retry.wait > 0:
                    started = time.monotonic()
                    await asyncio.sleep(self.retry.wait)
                    record.waited += time.monotonic() - started

    async def _execute_phase(self, prepared: Any, record: ExecutionRecord) -> Any:
        return await self._execute_with_retry(prepared, record)

    def _normalize_prepared(self, prepared: Any) -> Any:
        return prepared

    async def run_activation(self, state: Any) -> ExecutionRecord:
        """Run prepare, execute (with retry) and finalize once.

        Returns:
            ExecutionRecord with the outcome label in ``action``.

        Raises:
            NodeExecutionError: If any phase fails for good.
        """
        record = ExecutionRecord(node=self.name)
        logger.debug(f"{self.name}: prepare")

        try:
            prepared = self._normalize_prepared(await self.prepare(state))
        except Exception as e:
            raise NodeExecutionError(self.name, "prepare", e) from e

        try:
            result = await self._execute_phase(prepared, record)
        except Exception as e:
            raise NodeExecutionError(self.name, "execute", e) from e

        try:
            action = await self.finalize(state, prepared, result)
        except Exception as e:
            raise NodeExecutionError(self.name, "finalize", e) from e

        record.action = action if action is not None else DEFAULT_ACTION
        logger.debug(
            f"{self.name}: done (action={record.action}, attempts={record.attempts})"
        )
        return record


class BatchNode(Node):
    """Node whose execute phase runs once per prepared item.

    prepare() returns a sequence of independent items. Each item gets its
    own retry loop and fallback. Items run concurrently, bounded by
    ``concurrency`` when set (1 means strictly sequential). Results are
    stored by index, so finalize(state, items, results) always sees them in
    item order whatever order they completed in.

    A failing item does not stop the others. Once every item has finished,
    the lowest-index failure is raised as BatchItemError.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        retry: Optional[RetryPolicy] = None,
        concurrency: Optional[int] = None,
    ):
        super().__init__(name=name, retry=retry)
        if concurrency is not None and concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.concurrency = concurrency

    def _normalize_prepared(self, prepared: Any) -> list:
        return list(prepared or [])

    async def _execute_phase(self, items: Sequence[Any], record: ExecutionRecord) -> list:
        record.items = len(items)
        if not items:
            return []

        results: list[Any] = [None] * len(items)
        failures: dict[int, Exception] = {}
        semaphore = asyncio.Semaphore(self.concurrency) if self.concurrency else None

        async def run_item(index: int, item: Any) -> None:
            item_record = ExecutionRecord(node=f"{self.name}[{index}]")
            try:
                if semaphore is not None:
                    async with semaphore:
                        results[index] = await self._execute_with_retry(item, item_record)
                else:
                    results[index] = await self._execute_with_retry(item, item_record)
            except Exception as e:
                logger.error(f"{self.name}: item {index} failed: {e}")
                failures[index] = e
            finally:
                record.attempts += item_record.attempts
                record.waited += item_record.waited
                record.used_fallback = record.used_fallback or item_record.used_fallback

        await asyncio.gather(*(run_item(i, item) for i, item in enumerate(items)))

        if failures:
            index = min(failures)
            raise BatchItemError(index, failures[index]) from failures[index]
        return results
