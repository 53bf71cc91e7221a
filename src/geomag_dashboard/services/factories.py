"""
Data fetching services for series and observatory reference data.

Wraps the blocking web service client so it can be awaited from the event
loop; requests run in the loop's default executor.
"""

import asyncio
import functools
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, TYPE_CHECKING

import requests  # type: ignore

from ..api.helpers import parse_observatory_feature, parse_timeseries_payload
from ..core import constants
from ..models import Observatory, SeriesRecord

if TYPE_CHECKING:
    from ..api import GeomagAPI


async def _run_blocking(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run a blocking call in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


class TimeseriesFactory:
    """Fetch series records for a channel or an observatory."""

    def __init__(
        self,
        api_client: "GeomagAPI",
        observatories: Sequence[str] = tuple(constants.DEFAULT_OBSERVATORIES),
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize timeseries factory.

        Args:
            api_client: API client instance
            observatories: Observatory codes queried when a channel is selected
            logger: Logger instance
        """
        self.api_client = api_client
        self.observatories = list(observatories)
        self.logger = logger or logging.getLogger(__name__)

    def fetch(
        self,
        channel: Optional[str],
        observatory: Optional[str],
        channels: Optional[Sequence[str]],
        starttime: datetime,
        endtime: datetime,
        seconds: bool
    ) -> List[SeriesRecord]:
        """
        Fetch series records (blocking).

        With an observatory, all of its channels are requested (channels, or
        the single channel when no set is given). Otherwise the channel is
        requested from every configured observatory.

        Args:
            channel: Selected channel
            observatory: Selected observatory
            channels: Channel set for an observatory
            starttime: Start of the window
            endtime: End of the window
            seconds: Request 1 second data instead of 1 minute data

        Returns:
            List of series records

        Raises:
            ValueError: If neither a channel nor an observatory is given, or
                        a response is malformed
            requests.exceptions.RequestException: On request failure (in
                channel mode, only when every observatory fails)
        """
        sampling_period = (
            constants.SECOND_SAMPLING_PERIOD if seconds else constants.MINUTE_SAMPLING_PERIOD
        )

        if observatory is not None:
            elements = list(channels) if channels else [channel] if channel else []
            if not elements:
                raise ValueError(f"No channels to request for observatory {observatory}")
            payload = self.api_client.get_geomag_data(
                observatory,
                elements,
                starttime,
                endtime,
                sampling_period=sampling_period
            )
            records = parse_timeseries_payload(payload, observatory)
        elif channel is not None:
            records = self._fetch_channel(channel, starttime, endtime, sampling_period)
        else:
            raise ValueError("Select a channel or an observatory")

        self.logger.info(f"Fetched {len(records)} series")
        return records

    def _fetch_channel(
        self,
        channel: str,
        starttime: datetime,
        endtime: datetime,
        sampling_period: int
    ) -> List[SeriesRecord]:
        """
        Request one channel from every configured observatory.

        An observatory whose request or payload fails is logged and left
        out; the error is raised only when every observatory fails.
        """
        records: List[SeriesRecord] = []
        failures: List[Exception] = []

        for code in self.observatories:
            try:
                payload = self.api_client.get_geomag_data(
                    code,
                    [channel],
                    starttime,
                    endtime,
                    sampling_period=sampling_period
                )
                records.extend(parse_timeseries_payload(payload, code))
            except (requests.exceptions.RequestException, ValueError) as e:
                self.logger.warning(f"Skipping {code} {channel}: {e}")
                failures.append(e)

        if failures and len(failures) == len(self.observatories):
            raise failures[-1]
        return records

    async def get_timeseries(
        self,
        channel: Optional[str],
        observatory: Optional[str],
        channels: Optional[Sequence[str]],
        starttime: datetime,
        endtime: datetime,
        seconds: bool
    ) -> List[SeriesRecord]:
        """Fetch series records without blocking the event loop."""
        return await _run_blocking(
            self.fetch,
            channel,
            observatory,
            channels,
            starttime,
            endtime,
            seconds
        )


class ObservatoryFactory:
    """Fetch observatory reference data."""

    def __init__(
        self,
        api_client: "GeomagAPI",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize observatory factory.

        Args:
            api_client: API client instance
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self) -> List[Observatory]:
        """Fetch all observatories (blocking)."""
        observatories = []
        for feature in self.api_client.get_observatory_features():
            observatory = parse_observatory_feature(feature)
            if observatory is None:
                self.logger.warning(f"Skipping observatory without code: {feature}")
                continue
            observatories.append(observatory)
        return observatories

    async def get_observatories(self) -> List[Observatory]:
        """Fetch all observatories without blocking the event loop."""
        return await _run_blocking(self.fetch)
