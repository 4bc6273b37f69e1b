"""SLA monitor service.

Runs a background task that periodically sweeps open disputes and
escalates those whose panel has not decided within the configured SLA.
Each sweep goes through the dispute service, so escalations take the
dispute lock and bump the version like any other mutation.
"""

from __future__ import annotations

import asyncio
import contextlib
import time

import structlog

from lostfound_disputes.application.services.dispute_resolution_service import (
    DisputeResolutionService,
)

logger = structlog.get_logger(__name__)


class SlaMonitorService:
    """Periodic SLA sweeper.

    Example:
        >>> monitor = SlaMonitorService(dispute_service, interval_seconds=60)
        >>> await monitor.start_monitoring()
        >>> # ... runs in background
        >>> await monitor.stop_monitoring()
    """

    def __init__(
        self,
        dispute_service: DisputeResolutionService,
        interval_seconds: float = 60.0,
    ) -> None:
        self._dispute_service = dispute_service
        self._interval_seconds = interval_seconds
        self._is_monitoring = False
        self._monitoring_task: asyncio.Task[None] | None = None
        self._log = logger.bind(component="sla_monitor")

    @property
    def is_monitoring(self) -> bool:
        return self._is_monitoring

    async def sweep_once(self) -> list[str]:
        """Run a single sweep and return the escalated dispute ids."""
        return await self._dispute_service.sweep_sla()

    async def start_monitoring(self) -> None:
        """Start the background sweep loop."""
        if self._is_monitoring:
            self._log.warning("monitoring_already_running")
            return

        self._is_monitoring = True
        self._monitoring_task = asyncio.create_task(self._monitoring_loop())
        self._log.info("sla_monitoring_started", interval_seconds=self._interval_seconds)

    async def stop_monitoring(self) -> None:
        """Stop the background sweep loop."""
        if not self._is_monitoring:
            self._log.debug("monitoring_not_running")
            return

        self._is_monitoring = False

        if self._monitoring_task is not None:
            self._monitoring_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._monitoring_task
            self._monitoring_task = None

        self._log.info("sla_monitoring_stopped")

    async def _monitoring_loop(self) -> None:
        while self._is_monitoring:
            start_time = time.monotonic()
            escalated: list[str] = []
            try:
                escalated = await self.sweep_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self._log.error("sla_sweep_failed", error=str(e), exc_info=True)
            finally:
                latency_ms = (time.monotonic() - start_time) * 1000
                self._log.debug(
                    "sla_sweep_completed",
                    latency_ms=round(latency_ms, 2),
                    escalated=len(escalated),
                )

            try:
                await asyncio.sleep(self._interval_seconds)
            except asyncio.CancelledError:
                break

        self._log.debug("monitoring_loop_ended")
