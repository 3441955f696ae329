class ChartDataError(ValueError):
    """Base class for rejected chart input."""


class InvalidDomain(ChartDataError):
    """Value set for a scale is empty or holds non-finite numbers."""


class InvalidPattern(ChartDataError):
    """Pattern number outside the palette, or inconsistent pattern data."""


class MalformedRange(ChartDataError):
    """Price range whose minimum exceeds its maximum."""


class MalformedSeries(ChartDataError):
    """Series or label set that does not cover exactly the 13 slots."""


class InvalidProbability(ChartDataError):
    """Pattern probability outside the closed interval [0, 1]."""
