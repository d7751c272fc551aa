from __future__ import annotations

import asyncio
import functools
import logging
import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any, Protocol

from ..excel.reader import WorkbookSource
from ..models.config_models import CANONICAL_STATUSES, DistillerConfig
from ..models.processed_data import ProcessedData
from ..models.proposal_record import ProposalRecord
from .processor import ProcessingFailedError, process_workbook
from .record_filter import filter_records, get_unique_statuses

logger = logging.getLogger(__name__)

"""Distiller session: owner of parsed data, status selection and idle timer.

The uploaded workbook may contain sensitive data, so the session drops it after
a period without activity. Activity = successful parse or selection change.

Timer と clock は注入可能 (テストでは fake を渡す)。
"""

__all__ = [
    "DistillerSession",
    "IdleTimer",
    "UnknownStatusError",
]


class _Cancellable(Protocol):
    def start(self) -> None: ...
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], _Cancellable]


class UnknownStatusError(ValueError):
    """Raised when a selection contains a label outside the canonical universe."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


class IdleTimer:
    """Restartable one-shot timer.

    ``reset()`` cancels any pending timer and schedules a new one; ``cancel()``
    stops it. The factory is called as ``factory(interval, callback)`` and must
    return an object with ``start()`` and ``cancel()`` (threading.Timer).

    Each scheduled timer carries a generation number; a callback from a
    superseded or cancelled generation is a no-op.
    """

    def __init__(
        self,
        timeout_seconds: float,
        on_timeout: Callable[[], None],
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._on_timeout = on_timeout
        self._factory = timer_factory
        self._timer: Any = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._timer is not None

    def reset(self) -> None:
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            timer = self._factory(self.timeout_seconds, functools.partial(self._fire, generation))
            if isinstance(timer, threading.Timer):
                timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
            self._timer = None
        self._on_timeout()


class DistillerSession:
    """In-memory distiller state for one user session.

    Operations:
        parse / parse_async: load a workbook (failure keeps previous data)
        set_filter / toggle_status / select_all / clear_all: change selection
        clear: drop data and restore the default selection
    """

    def __init__(
        self,
        config: DistillerConfig,
        *,
        timer_factory: TimerFactory = threading.Timer,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.config = config
        self._clock = clock
        self._data: ProcessedData | None = None
        self._selected: tuple[str, ...] = self._validated(config.selected_statuses)
        self._processing = False
        # 状態の更新はタイマースレッド (_on_timeout) からも行われる
        self._lock = threading.RLock()
        self._timer = IdleTimer(config.session_timeout_seconds, self._on_timeout, timer_factory)

    # -- state -----------------------------------------------------------
    @property
    def data(self) -> ProcessedData | None:
        return self._data

    @property
    def selected_statuses(self) -> tuple[str, ...]:
        return self._selected

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def timer(self) -> IdleTimer:
        return self._timer

    @property
    def filtered_records(self) -> list[ProposalRecord]:
        with self._lock:
            data, selected = self._data, self._selected
        if data is None:
            return []
        return filter_records(
            data.records,
            selected,
            owner=self.config.owner,
            pi_last_name=self.config.pi_last_name,
        )

    @property
    def unique_statuses(self) -> list[str]:
        data = self._data
        if data is None:
            return []
        return get_unique_statuses(data.records)

    # -- parsing ---------------------------------------------------------
    def parse(self, source: WorkbookSource) -> ProcessedData:
        """Parse ``source`` and replace the held data.

        Raises:
            ProcessingFailedError: previous data (if any) is left untouched
        """
        self._processing = True
        try:
            data = process_workbook(source, clock=self._clock)
        except ProcessingFailedError as e:
            logger.warning(f"{e}")
            raise
        finally:
            self._processing = False
        return self._commit(data)

    async def parse_async(self, source: WorkbookSource) -> ProcessedData:
        """Awaitable parse; the decode runs in a worker thread.

        Concurrent calls are not guarded. Hosts should serialize uploads
        using ``is_processing``.
        """
        self._processing = True
        try:
            data = await asyncio.to_thread(process_workbook, source, clock=self._clock)
        except ProcessingFailedError as e:
            logger.warning(f"{e}")
            raise
        finally:
            self._processing = False
        return self._commit(data)

    def _commit(self, data: ProcessedData) -> ProcessedData:
        with self._lock:
            self._data = data
            self._timer.reset()
        return data

    # -- selection -------------------------------------------------------
    @staticmethod
    def _validated(statuses: Iterable[str]) -> tuple[str, ...]:
        selected: list[str] = []
        for status in statuses:
            if status not in CANONICAL_STATUSES:
                raise UnknownStatusError(f"unknown status label: {status!r}")
            if status not in selected:
                selected.append(status)
        return tuple(selected)

    def set_filter(self, statuses: Iterable[str]) -> tuple[str, ...]:
        selected = self._validated(statuses)
        with self._lock:
            self._selected = selected
            self._timer.reset()
        return selected

    def toggle_status(self, status: str, checked: bool) -> tuple[str, ...]:
        if checked:
            return self.set_filter([*self._selected, status])
        return self.set_filter(s for s in self._selected if s != status)

    def select_all(self) -> tuple[str, ...]:
        return self.set_filter(CANONICAL_STATUSES)

    def clear_all(self) -> tuple[str, ...]:
        return self.set_filter(())

    # -- lifecycle -------------------------------------------------------
    def clear(self) -> None:
        """Drop all record state and restore the configured default selection."""
        with self._lock:
            self._timer.cancel()
            self._data = None
            self._selected = self._validated(self.config.selected_statuses)

    def close(self) -> None:
        self._timer.cancel()

    def _on_timeout(self) -> None:
        logger.info("session idle timeout: cleared distilled data")
        self.clear()
