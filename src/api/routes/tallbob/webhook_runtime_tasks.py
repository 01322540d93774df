"""Pool de tasks assíncronas para webhooks Tall Bob (modo `async`).

Cada task recebe o nome `webhook:<correlation_id>` para que falhas e
cancelamentos no shutdown possam ser rastreados nos logs.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TASKS = 100
_TASK_NAME_PREFIX = "webhook:"


class ProcessingTaskPool:
    """Tasks em andamento + semáforo que limita quantas executam juntas."""

    def __init__(self, max_concurrency: int = MAX_CONCURRENT_TASKS) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def schedule(self, *, correlation_id: str, coroutine: Awaitable[Any]) -> int:
        task = asyncio.create_task(
            self._run(coroutine),
            name=f"{_TASK_NAME_PREFIX}{correlation_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.info(
            "webhook_processing_scheduled",
            extra={
                "channel": "tallbob",
                "correlation_id": correlation_id,
                "active_tasks": len(self._tasks),
            },
        )
        return len(self._tasks)

    async def _run(self, coroutine: Awaitable[Any]) -> None:
        async with self._semaphore:
            await coroutine

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "webhook_processing_task_failed",
                    extra={
                        "channel": "tallbob",
                        "correlation_id": task.get_name().removeprefix(_TASK_NAME_PREFIX),
                        "error_type": type(exc).__name__,
                    },
                )

    async def drain(self, timeout_seconds: float) -> int:
        """Espera as tasks pendentes; cancela as que passarem do timeout.

        Returns:
            Quantidade de tasks canceladas.
        """
        if not self._tasks:
            return 0

        _, pending = await asyncio.wait(list(self._tasks), timeout=timeout_seconds)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.warning(
                "webhook_processing_shutdown_cancelled",
                extra={
                    "channel": "tallbob",
                    "cancelled_tasks": len(pending),
                    "correlation_ids": sorted(
                        task.get_name().removeprefix(_TASK_NAME_PREFIX) for task in pending
                    ),
                },
            )
        return len(pending)


_pool = ProcessingTaskPool()


def schedule_processing_task(*, correlation_id: str, coroutine: Awaitable[Any]) -> int:
    """Agenda processamento em background. Retorna o total de tasks ativas."""
    return _pool.schedule(correlation_id=correlation_id, coroutine=coroutine)


def active_task_count() -> int:
    return len(_pool)


async def drain_processing_tasks(timeout_seconds: float = 30.0) -> int:
    """Aguarda tasks pendentes durante shutdown do processo."""
    if len(_pool):
        logger.info(
            "webhook_processing_shutdown_wait",
            extra={
                "channel": "tallbob",
                "pending_tasks": len(_pool),
                "timeout_seconds": timeout_seconds,
            },
        )
    return await _pool.drain(timeout_seconds)
