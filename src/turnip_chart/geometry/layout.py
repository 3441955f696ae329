# stdlib
import math
from dataclasses import dataclass, field
from typing import Dict
# projectlib
from turnip_chart.geometry.errors import InvalidDomain
from turnip_chart.utils.typing import Margin

# Pixel margins around the plotting area, room for the axis labels
MARGIN: Dict[Margin, int] = {"top": 10, "right": 0, "bottom": 40, "left": 30}


@dataclass(frozen=True, slots=True)
class ChartLayout:
    """
    Pixel budget of the drawing surface.

    The chart is laid out in a 100 x 50 grid of ``unit``-sized cells,
    where ``unit`` is one hundredth of the measured surface width, so
    the aspect ratio is always 2:1.
    """
    unit: float
    margin: Dict[Margin, int] = field(default_factory=lambda: dict(MARGIN))

    @classmethod
    def from_width(cls, width: float) -> "ChartLayout":
        """
        Derive the layout from a measured surface width.

        Raises
        ------
        InvalidDomain
            If ``width`` is not a positive finite number.
        """
        width = float(width)
        if not math.isfinite(width) or width <= 0:
            raise InvalidDomain(
                f"Chart width must be a positive number, got {width}."
            )
        return cls(unit=width / 100)

    @property
    def width(self) -> float:
        return 100 * self.unit

    @property
    def height(self) -> float:
        return 50 * self.unit

    @property
    def line_width(self) -> int:
        """Stroke width of extent and input lines."""
        return max(1, math.floor(self.unit / 4))
