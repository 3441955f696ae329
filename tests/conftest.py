# stdlib
from typing import Callable, Dict, Optional, Tuple
# thirdpartylib
import matplotlib
import pytest
# projectlib
from turnip_chart.data.models import Possibility

# Render off-screen
matplotlib.use("Agg")

type Ranges = Dict[int, Tuple[float, float]]
type PossibilityFactory = Callable[..., Possibility]

BASE_PRICE = 100.0


@pytest.fixture
def make_possibility() -> PossibilityFactory:
    """Build a possibility with degenerate ranges except ``ranges``."""
    def factory(
            number: int,
            probability: float,
            ranges: Optional[Ranges] = None,
            *,
            description: Optional[str] = None,
            base: float = BASE_PRICE,
        ) -> Possibility:
        prices = [(base, base)] * 13
        for slot, bounds in (ranges or {}).items():
            prices[slot] = bounds
        return Possibility.from_prices(
            number,
            description or f"pattern {number}",
            probability,
            prices,
        )
    return factory


@pytest.fixture
def baseline(make_possibility: PossibilityFactory) -> Possibility:
    """Aggregate record spanning 80..160 on Monday and Tuesday."""
    return make_possibility(
        4,
        1.0,
        {1: (80, 120), 2: (85, 140), 3: (90, 160)},
        description="All patterns",
    )


@pytest.fixture
def empty_input() -> list[Optional[float]]:
    return [100.0] + [None] * 12
