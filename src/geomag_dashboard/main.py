"""
Main entry point for the geomagnetic timeseries dashboard.

Wires the selection store, the web service and the sync controller together
and shows the published results in the terminal.
"""

import asyncio
import sys
from typing import Callable, Iterable, List, Optional

from .core import Config, setup_logger, LoggerContext
from .api import GeomagAPI
from .models import Selection, SeriesRecord, TimeMode
from .processing import Description
from .services import (
    ConfigurationStore,
    DataSyncController,
    ObservatoryCollection,
    ObservatoryFactory,
    SelectionHandler,
    TimeseriesFactory,
    TimeWindowResolver,
)


def format_results(description: Description, records: Iterable[SeriesRecord]) -> List[str]:
    """
    Format published results for the terminal.

    Args:
        description: Title and subtitle of the current selection
        records: Published series records

    Returns:
        Lines of text
    """
    lines = [description.title, description.subtitle]
    records = list(records)
    if not records:
        lines.append("  (no data)")
        return lines

    for record in records:
        values = [v for v in record.values if v is not None]
        last = f"{values[-1]:.2f}" if values else "-"
        name = record.metadata.get("name") or ""
        lines.append(
            f"  {record.observatory or '?':<4} {record.channel:<3} {name:<24} "
            f"{len(record):>6} samples  last={last}"
        )
    return lines


class TimeseriesDashboardApp:
    """Terminal application for the geomagnetic timeseries dashboard."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        # Load configuration
        self.config = Config(config_file)

        # Setup logger
        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=self.config.log_level
        )
        self.logger.info(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[GeomagAPI] = None
        self.store: Optional[ConfigurationStore] = None
        self.observatories: Optional[ObservatoryCollection] = None
        self.observatory_factory: Optional[ObservatoryFactory] = None
        self.timeseries_factory: Optional[TimeseriesFactory] = None
        self.selection: Optional[SelectionHandler] = None
        self.controller: Optional[DataSyncController] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.api_client = GeomagAPI(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )

        self.observatory_factory = ObservatoryFactory(self.api_client, logger=self.logger)
        self.timeseries_factory = TimeseriesFactory(
            self.api_client,
            observatories=self.config.observatories,
            logger=self.logger
        )

        self.store = ConfigurationStore(
            Selection(
                channel=self.config.default_channel,
                time_mode=TimeMode.parse(self.config.default_time_mode)
            ),
            logger=self.logger
        )
        self.selection = SelectionHandler(
            self.store,
            channels=self.config.channels,
            observatories=self.config.observatories,
            logger=self.logger
        )
        self.observatories = ObservatoryCollection(logger=self.logger)
        self.controller = DataSyncController(
            store=self.store,
            fetch_service=self.timeseries_factory,
            observatories=self.observatories,
            channels=self.config.channels,
            resolver=TimeWindowResolver(
                refresh_interval_ms=self.config.refresh_interval_ms,
                logger=self.logger
            ),
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    async def load_observatories(self) -> None:
        """
        Load observatory reference data.

        Failure is not fatal: titles then show codes only and records are
        sorted by observatory code.
        """
        if self.observatory_factory is None or self.observatories is None:
            raise RuntimeError("Components not properly initialized")

        try:
            with LoggerContext(self.logger, "observatory lookup"):
                observatories = await self.observatory_factory.get_observatories()
        except Exception as e:
            self.logger.warning(f"Observatory reference data unavailable: {e}")
            return
        self.observatories.reset(observatories)

    async def run(
        self,
        once: bool = False,
        on_results: Optional[Callable[[List[str]], None]] = None
    ) -> None:
        """
        Run the dashboard until cancelled.

        Args:
            once: Stop after the first sync cycle completes
            on_results: Called with formatted lines whenever results are published
        """
        if self.controller is None:
            self.initialize_components()
        controller = self.controller
        if controller is None:
            raise RuntimeError("Components not properly initialized")

        if on_results is not None:
            def publish(records):
                description = controller.formatter.format(
                    controller.store.snapshot(), controller.observatories
                )
                on_results(format_results(description, records))

            controller.results.on_reset(publish)

        try:
            await self.load_observatories()
            controller.start()
            if once:
                await controller.wait()
            else:
                # Refreshes are driven by the controller's timer
                await asyncio.Event().wait()
        finally:
            controller.destroy()
            if self.api_client:
                self.api_client.close()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Geomagnetic Timeseries Dashboard"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--channel",
        type=str,
        default=None,
        help="Show one channel from all observatories (e.g. H)"
    )
    target.add_argument(
        "--observatory",
        type=str,
        default=None,
        help="Show all channels of one observatory (e.g. BOU)"
    )
    parser.add_argument(
        "--timemode",
        choices=[mode.value for mode in TimeMode],
        default=None,
        help="Time window. Default: from configuration"
    )
    parser.add_argument(
        "--starttime",
        type=str,
        default=None,
        help="Custom start time (YYYY-MM-DD HH:MM:SS, UTC)"
    )
    parser.add_argument(
        "--endtime",
        type=str,
        default=None,
        help="Custom end time (YYYY-MM-DD HH:MM:SS, UTC)"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Exit after the first update"
    )

    args = parser.parse_args()

    try:
        app = TimeseriesDashboardApp(config_file=args.config)
        app.initialize_components()
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    selection = app.selection
    if args.channel:
        selection.select_channel(args.channel)
    if args.observatory:
        selection.select_observatory(args.observatory)

    custom = args.timemode == "custom" or args.starttime or args.endtime
    if custom:
        if not selection.submit_custom_range(args.starttime, args.endtime):
            print(selection.error)
            sys.exit(1)
    elif args.timemode:
        selection.select_time_mode(args.timemode)

    def show(lines: List[str]) -> None:
        print("\n".join(lines), flush=True)

    try:
        asyncio.run(app.run(once=args.once, on_results=show))
    except KeyboardInterrupt:
        pass

    if args.once and app.controller is not None and app.controller.last_error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
