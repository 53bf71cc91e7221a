"""
Description of the data being shown.
"""

from typing import NamedTuple, Optional, TYPE_CHECKING

from ..core.date_utils import DateUtils
from ..models import Selection, TimeMode

if TYPE_CHECKING:
    from ..services.observatories import ObservatoryCollection


class Description(NamedTuple):
    title: str
    subtitle: str


class DescriptionFormatter:
    """Build the title and subtitle for the current selection."""

    @staticmethod
    def time_phrase(selection: Selection) -> str:
        if selection.time_mode is TimeMode.REALTIME:
            return "Past 15 Minutes"
        if selection.time_mode is TimeMode.PASTDAY:
            return "Past day"
        if selection.time_mode is TimeMode.CUSTOM:
            return (
                DateUtils.format_date(selection.start_time) + " - " +
                DateUtils.format_date(selection.end_time)
            )
        raise ValueError(f"Unknown time mode: {selection.time_mode!r}")

    def format(
        self,
        selection: Selection,
        observatories: Optional["ObservatoryCollection"] = None
    ) -> Description:
        """
        Describe a selection.

        The observatory name is added to the title when the reference
        collection already knows it; it may not be loaded yet.
        """
        if selection.observatory is not None:
            title = selection.observatory
            observatory = observatories.get(selection.observatory) if observatories else None
            if observatory is not None:
                title = f"{title} {observatory.name}"
            title = f"{title} Observatory"
            fragment = "all observatory channels"
        else:
            title = f"{selection.channel} Channel"
            fragment = "all observatories with this channel."

        return Description(title, f"{self.time_phrase(selection)}, {fragment}")
