"""
Business logic services for the geomagnetic timeseries dashboard.

Services hold the selection, resolve time windows, fetch data from the web
service and keep the published results in sync.
"""

from .config_store import ConfigurationStore
from .controller import DataSyncController, FetchService
from .factories import ObservatoryFactory, TimeseriesFactory
from .observatories import ObservatoryCollection
from .resolver import TimeWindowResolver
from .results import ResultSet
from .scheduler import AutoRefreshScheduler
from .selection import SelectionHandler

__all__ = [
    "ConfigurationStore",
    "DataSyncController",
    "FetchService",
    "ObservatoryFactory",
    "TimeseriesFactory",
    "ObservatoryCollection",
    "TimeWindowResolver",
    "ResultSet",
    "AutoRefreshScheduler",
    "SelectionHandler",
]
