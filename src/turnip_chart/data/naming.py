# stdlib
from typing import Sequence, Tuple
# projectlib
from turnip_chart.data.schemas import SLOT_COUNT
from turnip_chart.geometry.errors import MalformedSeries

# English fallbacks for the localized weekday and time-of-day names
SUNDAY = "Sunday"
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
TIMES = ("AM", "PM")

def slot_labels(
        *,
        sunday: str = SUNDAY,
        weekdays: Sequence[str] = WEEKDAYS,
        times: Sequence[str] = TIMES,
    ) -> Tuple[str, ...]:
    """
    Build the 13 category keys of the horizontal axis.

    The first key is the Sunday purchase slot, followed by each
    weekday paired with each time of day (``"Mon AM"``, ``"Mon PM"``,
    ...). The strings are treated as opaque identifiers downstream;
    only their order and count matter.

    Parameters
    ----------
    sunday : str, default "Sunday"
        Label of the purchase slot.
    weekdays : Sequence[str]
        Six (usually abbreviated) weekday names, Monday first.
    times : Sequence[str]
        Two time-of-day names, morning first.

    Returns
    -------
    tuple[str, ...]
        Thirteen slot labels.

    Raises
    ------
    MalformedSeries
        If the names do not produce 13 distinct labels.

    Examples
    --------
    >>> slot_labels()[:3]
    ('Sunday', 'Mon AM', 'Mon PM')
    """
    labels = (sunday,) + tuple(
        f"{day} {time}" for day in weekdays for time in times
    )
    return validate_labels(labels)

def validate_labels(labels: Sequence[str]) -> Tuple[str, ...]:
    """Ensure a label set names each slot exactly once."""
    labels = tuple(labels)
    if len(labels) != SLOT_COUNT:
        raise MalformedSeries(
            f"Expected {SLOT_COUNT} slot labels, got {len(labels)}."
        )
    if len(set(labels)) != SLOT_COUNT:
        raise MalformedSeries(f"Slot labels must be unique: {labels}.")
    return labels
