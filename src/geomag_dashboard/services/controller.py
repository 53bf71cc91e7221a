"""
Data synchronization controller.

Runs one sync cycle per selection change: cancel the pending refresh,
resolve the time window, fetch, merge reference metadata, sort and publish.
Every cycle gets a token from an increasing counter; a completion whose
token is no longer current is dropped, so a slow response can never
overwrite the results of a later cycle.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, FrozenSet, List, Optional, Protocol, Sequence

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import ResolvedWindow, Selection, SeriesRecord
from ..processing import Description, DescriptionFormatter, MetadataMerger
from .config_store import ConfigurationStore
from .observatories import ObservatoryCollection
from .resolver import TimeWindowResolver
from .results import ResultSet
from .scheduler import AutoRefreshScheduler


class FetchService(Protocol):
    """Series retrieval backend."""

    async def get_timeseries(
        self,
        channel: Optional[str],
        observatory: Optional[str],
        channels: Optional[Sequence[str]],
        starttime: datetime,
        endtime: datetime,
        seconds: bool
    ) -> List[SeriesRecord]:
        ...


class DataSyncController:
    """Keep the published results in sync with the selection."""

    def __init__(
        self,
        store: ConfigurationStore,
        fetch_service: FetchService,
        observatories: Optional[ObservatoryCollection] = None,
        channels: Sequence[str] = tuple(constants.DEFAULT_CHANNELS),
        results: Optional[ResultSet] = None,
        resolver: Optional[TimeWindowResolver] = None,
        scheduler: Optional[AutoRefreshScheduler] = None,
        merger: Optional[MetadataMerger] = None,
        formatter: Optional[DescriptionFormatter] = None,
        clock: Callable[[], datetime] = DateUtils.now,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize controller.

        Args:
            store: Selection store to follow
            fetch_service: Series retrieval backend
            observatories: Reference collection used for metadata and titles
            channels: Channels requested when an observatory is selected
            results: Result sink
            resolver: Time window resolver
            scheduler: Auto-refresh scheduler
            merger: Metadata merger
            formatter: Description formatter
            clock: Returns the current UTC time
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.store = store
        self.fetch_service = fetch_service
        self.observatories = observatories if observatories is not None else ObservatoryCollection()
        self.channels = list(channels)
        self.results = results if results is not None else ResultSet(self.logger)
        self.resolver = resolver or TimeWindowResolver(logger=self.logger)
        self.scheduler = scheduler or AutoRefreshScheduler(logger=self.logger)
        self.merger = merger or MetadataMerger(self.logger)
        self.formatter = formatter or DescriptionFormatter()
        self.clock = clock

        self.description = Description("", "")
        self.last_error: Optional[Exception] = None
        self.window: Optional[ResolvedWindow] = None

        self._token = 0
        self._loading = False
        self._task: Optional["asyncio.Task[None]"] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def loading(self) -> bool:
        """True while the current cycle's fetch is outstanding."""
        return self._loading

    def start(self) -> None:
        """
        Follow the store and run the first cycle.

        Must be called from a running event loop.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self._on_config_change)
            self.observatories.on_reset(self.update_description)
        self.sync()

    def _on_config_change(self, selection: Selection, changed: FrozenSet[str]) -> None:
        """Configuration store change listener."""
        self.sync()

    def _on_auto_update(self) -> None:
        """Auto-refresh timer callback; uses the selection current at fire time."""
        self.logger.debug("Auto-refresh")
        self.sync()

    def sync(self) -> int:
        """
        Start a new cycle, superseding any cycle still in flight.

        Returns:
            Token of the new cycle
        """
        self.scheduler.cancel()
        self._token += 1
        token = self._token
        selection = self.store.snapshot()
        self._loading = True

        try:
            window = self.resolver.resolve(selection, self.clock())
        except ValueError as e:
            self._fail(e)
            return token

        self.window = window
        channels = self.channels if selection.observatory is not None else None

        self.logger.info(
            f"Sync cycle {token}: channel={selection.channel} "
            f"observatory={selection.observatory} mode={selection.time_mode.value}"
        )
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(token, selection, window, channels))
        return token

    async def _run(
        self,
        token: int,
        selection: Selection,
        window: ResolvedWindow,
        channels: Optional[List[str]]
    ) -> None:
        """Fetch and publish the results of one cycle."""
        try:
            records = await self.fetch_service.get_timeseries(
                channel=selection.channel,
                observatory=selection.observatory,
                channels=channels,
                starttime=window.start,
                endtime=window.end,
                seconds=window.use_seconds_resolution
            )
            if token != self._token:
                self.logger.debug(f"Dropping stale results of cycle {token}")
                return
            records = self.merger.merge_and_sort(records, self.observatories)
        except Exception as e:
            if token != self._token:
                self.logger.debug(f"Dropping stale failure of cycle {token}: {e}")
                return
            self._fail(e)
            return

        self.results.reset(records)
        self.last_error = None
        self._loading = False
        self.update_description()

        if window.refresh_interval_ms is not None:
            self.scheduler.arm(window.refresh_interval_ms, self._on_auto_update)

    def _fail(self, error: Exception) -> None:
        """Leave the current cycle with empty results and no refresh."""
        self.logger.error(f"Failed to load timeseries: {error}", exc_info=error)
        self.last_error = error
        self._loading = False
        self.results.reset([])

    def update_description(self) -> None:
        """Recompute the description of the data being shown."""
        self.description = self.formatter.format(self.store.snapshot(), self.observatories)

    async def wait(self) -> None:
        """Wait until no fetch task is outstanding."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    def destroy(self) -> None:
        """Stop following the store and cancel the pending refresh."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            self.observatories.off_reset(self.update_description)
        self.scheduler.cancel()
        # completions still in flight become stale
        self._token += 1
        self._loading = False
