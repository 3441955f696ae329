# stdlib
import math
from typing import Dict, Iterable, List, Sequence, Tuple
# thirdpartylib
import numpy as np
# projectlib
from turnip_chart.geometry.errors import InvalidDomain
from turnip_chart.geometry.layout import ChartLayout

# Headroom below the lowest price so the smallest bar keeps some height
DOMAIN_FLOOR_OFFSET = 5
# Square root: compresses high prices so that a crash after a large
# spike is still visible
EXPONENT = 0.5
BAND_PADDING = 0.1

def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity."""
    return math.floor(value + 0.5)


class BandScale(object):
    """
    Categorical scale that splits a pixel range into equal bands.

    Bands are separated by ``padding`` (fraction of a step) and the same
    padding is applied on the outer edges. The step and band starts are
    snapped to whole pixels so bar edges render crisply.
    """

    def __init__(
            self,
            domain: Sequence[str],
            range: Tuple[float, float],
            *,
            padding: float = BAND_PADDING,
            align: float = 0.5,
        ) -> None:
        self.domain = tuple(domain)
        self.range = range
        self.padding = padding
        self.align = align
        self._index: Dict[str, int] = {
            label: i for i, label in enumerate(self.domain)
        }
        self._rescale()

    def _rescale(self) -> None:
        n = len(self.domain)
        start, stop = sorted(self.range)
        step = (stop - start) / max(1, n - self.padding + self.padding * 2)
        step = math.floor(step)
        start += (stop - start - step * (n - self.padding)) * self.align
        self.step = step
        self._start = round_half_up(start)
        self._bandwidth = round_half_up(step * (1 - self.padding))

    def __call__(self, label: str) -> int:
        """Pixel position of the start of the band for ``label``."""
        return self.slot(self._index[label])

    def slot(self, index: int) -> int:
        """Pixel position of the start of the band at ``index``."""
        if not 0 <= index < len(self.domain):
            raise IndexError(f"Slot {index} is outside the band domain.")
        return self._start + self.step * index

    def bandwidth(self) -> int:
        return self._bandwidth

    def center(self, index: int) -> float:
        return self.slot(index) + self._bandwidth / 2


class PowScale(object):
    """
    Continuous power-law scale with rounded pixel output.

    Both the domain bounds and the input are passed through a signed
    power transform before linear interpolation onto the range.
    """

    def __init__(
            self,
            domain: Tuple[float, float],
            range: Tuple[float, float],
            *,
            exponent: float = EXPONENT,
        ) -> None:
        self.domain = domain
        self.range = range
        self.exponent = exponent

    def _transform(self, value: np.ndarray) -> np.ndarray:
        return np.sign(value) * np.abs(value) ** self.exponent

    def scale(self, values: Iterable[float]) -> np.ndarray:
        """Vectorized form of ``__call__``; returns an integer array."""
        x = np.asarray(list(values), dtype=float)
        d0, d1 = self._transform(np.asarray(self.domain, dtype=float))
        r0, r1 = self.range
        if d1 == d0:
            t = np.full_like(x, 0.5)
        else:
            t = (self._transform(x) - d0) / (d1 - d0)
        return np.floor(r0 * (1 - t) + r1 * t + 0.5).astype(int)

    def __call__(self, value: float) -> int:
        return int(self.scale([value])[0])

    def ticks(self, count: int = 5) -> List[float]:
        """
        Round-numbered tick values spanning the domain.

        Tick spacing is a power of ten times 1, 2 or 5, chosen so that
        roughly ``count`` ticks fall inside the domain.

        Parameters
        ----------
        count : int, default 5
            Approximate number of ticks wanted.

        Returns
        -------
        list[float]
            Tick values in ascending order.
        """
        low, high = sorted(self.domain)
        if count <= 0 or low == high:
            return [low] if low == high else []
        step = tick_step(low, high, count)
        first = math.ceil(low / step)
        last = math.floor(high / step)
        steps = np.arange(first, last + 1) * step
        return [round(float(v), 10) for v in steps]

def tick_step(low: float, high: float, count: int) -> float:
    """Spacing of ``1``, ``2`` or ``5`` times a power of ten."""
    raw = (high - low) / count
    power = math.floor(math.log10(raw))
    error = raw / 10 ** power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * 10.0 ** power

def value_extent(values: Iterable[float]) -> Tuple[float, float]:
    """
    Minimum and maximum of a value set.

    Raises
    ------
    InvalidDomain
        If the set is empty or contains non-finite numbers.
    """
    array = np.asarray(list(values), dtype=float)
    if array.size == 0:
        raise InvalidDomain("Cannot build a price scale from no values.")
    if not np.all(np.isfinite(array)):
        raise InvalidDomain(
            "Price scale values must be finite, got "
            f"{array[~np.isfinite(array)].tolist()}."
        )
    return float(array.min()), float(array.max())

def build_scales(
        layout: ChartLayout,
        labels: Sequence[str],
        values: Iterable[float],
    ) -> Tuple[BandScale, PowScale]:
    """
    Build the horizontal slot scale and the vertical price scale.

    Parameters
    ----------
    layout : ChartLayout
        Pixel budget of the drawing surface.
    labels : Sequence[str]
        The 13 slot labels, slot 0 first.
    values : Iterable[float]
        Every price the chart has to show: observed input and the
        baseline prediction bounds.

    Returns
    -------
    tuple[BandScale, PowScale]
        ``(x, y)``. ``y`` maps larger prices to smaller pixel rows.

    Raises
    ------
    InvalidDomain
        If ``values`` is empty or holds non-finite numbers.
    """
    low, high = value_extent(values)
    margin = layout.margin
    x = BandScale(
        labels,
        (margin["left"], layout.width - margin["right"]),
    )
    y = PowScale(
        (low - DOMAIN_FLOOR_OFFSET, high),
        (layout.height - margin["bottom"], margin["top"]),
    )
    return x, y
