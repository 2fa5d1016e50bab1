"""Constants shared by calendar-style overlays."""

from enum import Enum

DAYS_AMOUNT_OF_CALENDAR = 42  # six full weeks
WEEKDAYS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]

BASE_DATE_FORMAT = "M-D-YYYY"
BASE_DATE_FORMAT_WITH_TIME = "M-D-YYYY HH:mm"
DISPLAY_DATE_FORMAT = "MMM D, YYYY"
DISPLAY_DATE_FORMAT_WITH_TIME = "MMM D, YYYY HH:mm"

ARROW_UP = "ArrowUp"
ARROW_RIGHT = "ArrowRight"
ARROW_DOWN = "ArrowDown"
ARROW_LEFT = "ArrowLeft"
ENTER = "Enter"


class CalendarMode(str, Enum):
    """Selection modes of a calendar overlay."""

    DATE = "date"
    DATE_TIME = "date-time"
    RANGE = "range"
    RANGE_TIME = "range-time"

    @property
    def is_range(self) -> bool:
        return self in (CalendarMode.RANGE, CalendarMode.RANGE_TIME)

    @property
    def has_time(self) -> bool:
        return self in (CalendarMode.DATE_TIME, CalendarMode.RANGE_TIME)

    @property
    def base_format(self) -> str:
        """Input template for values entered in this mode."""
        return BASE_DATE_FORMAT_WITH_TIME if self.has_time else BASE_DATE_FORMAT

    @property
    def display_format(self) -> str:
        """Template for values shown to the user in this mode."""
        return DISPLAY_DATE_FORMAT_WITH_TIME if self.has_time else DISPLAY_DATE_FORMAT
