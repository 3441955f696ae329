# stdlib
from enum import Enum
# projectlib
from turnip_chart.geometry.errors import InvalidPattern

# Slot 0 is the Sunday purchase price, slots 1..12 are Mon AM..Sat PM
SLOT_COUNT = 13
BASELINE_SLOT = 0
PREDICTED_SLOTS = tuple(range(BASELINE_SLOT + 1, SLOT_COUNT))


class Pattern(int, Enum):
    """
    Price-evolution patterns the upstream predictor can assign.

    Note:
        The numbers are the identifiers used by the predictor output.
        The aggregate baseline record uses a number outside this enum
        and is never looked up here.
    """
    FLUCTUATING = 0
    LARGE_SPIKE = 1
    DECREASING = 2
    SMALL_SPIKE = 3

    @classmethod
    def from_number(cls, number: int) -> "Pattern":
        """Look up a pattern, rejecting numbers outside the palette."""
        try:
            return cls(number)
        except ValueError as e:
            raise InvalidPattern(
                f"Pattern number {number!r} is not one of "
                f"{[p.value for p in cls]}."
            ) from e

    @property
    def color(self) -> str:
        return PATTERN_COLORS[self]

    @property
    def color_fg(self) -> str:
        return PATTERN_COLORS_FG[self]

    @property
    def order(self) -> int:
        return DRAW_ORDER.index(self)


# From: https://colorbrewer2.org/#type=diverging&scheme=PRGn&n=4
PATTERN_COLORS = {
    Pattern.FLUCTUATING: "#f1b6da",
    Pattern.LARGE_SPIKE: "#4dac26",
    Pattern.DECREASING: "#d01c8b",
    Pattern.SMALL_SPIKE: "#b8e186",
}
# Text color readable on top of each fill
PATTERN_COLORS_FG = {
    Pattern.FLUCTUATING: "#000",
    Pattern.LARGE_SPIKE: "#fff",
    Pattern.DECREASING: "#fff",
    Pattern.SMALL_SPIKE: "#000",
}
# Back-to-front bar layering, roughly by the area each pattern's bars
# are expected to cover
DRAW_ORDER = (
    Pattern.LARGE_SPIKE,
    Pattern.SMALL_SPIKE,
    Pattern.FLUCTUATING,
    Pattern.DECREASING,
)
