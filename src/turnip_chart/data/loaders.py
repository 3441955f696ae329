# stdlib
import re
from typing import List
# thirdpartylib
import polars as pl
# projectlib
from turnip_chart.data.models import (
    InputSeries,
    Possibility,
    PredictionSet,
    optional_price,
)
from turnip_chart.data.schemas import SLOT_COUNT
from turnip_chart.geometry.errors import InvalidDomain, MalformedSeries
from turnip_chart.utils.paths import validate_address
from turnip_chart.utils.typing import Address, Price

# Fields every possibility record must carry
POSSIBILITY_FIELDS = (
    "pattern_number",
    "pattern_description",
    "category_total_probability",
    "prices",
)
# The aggregate baseline record may omit its probability
BASELINE_PROBABILITY = 1.0

def possibilities_from_frame(df: pl.DataFrame) -> PredictionSet:
    """
    Convert a frame of predictor records into a ``PredictionSet``.

    The first row is the baseline record; every further row is one
    possibility of a specific pattern. The baseline may leave
    ``category_total_probability`` out, in which case it counts as 1.

    Parameters
    ----------
    df : polars.DataFrame
        One row per possibility with columns ``pattern_number``,
        ``pattern_description``, ``category_total_probability`` and
        ``prices`` (a list of ``{min, max}`` structs, slot 0 first).

    Returns
    -------
    PredictionSet
        Baseline and predictions in row order.

    Raises
    ------
    MalformedSeries
        If a required column is missing.
    InvalidDomain
        If the frame is empty.
    InvalidProbability
        If a prediction lacks its probability.
    """
    if "category_total_probability" not in df.columns:
        df = df.with_columns(
            pl.lit(None, dtype=pl.Float64).alias("category_total_probability")
        )
    missing = [c for c in POSSIBILITY_FIELDS if c not in df.columns]
    if missing:
        raise MalformedSeries(f"Possibility records lack fields {missing}.")
    if df.is_empty():
        raise InvalidDomain("At least the baseline possibility is required.")
    rows = df.select(POSSIBILITY_FIELDS).iter_rows(named=True)
    possibilities: List[Possibility] = []
    for index, row in enumerate(rows):
        probability = row["category_total_probability"]
        if index == 0 and probability is None:
            probability = BASELINE_PROBABILITY
        possibilities.append(
            Possibility.from_prices(
                row["pattern_number"],
                row["pattern_description"] or "",
                probability,
                row["prices"],
            )
        )
    return PredictionSet.from_possibilities(possibilities)

def load_possibilities(address: Address) -> PredictionSet:
    """Read a JSON array of possibility records from disk."""
    source = validate_address(address, extension=".json", mode="r")
    df = pl.read_json(source)
    return possibilities_from_frame(df)

def parse_prices(text: str) -> InputSeries:
    """
    Parse a price list as stored in the price-entry URL.

    Entries are separated by commas or dots; empty entries mark slots
    that have not been observed. Missing trailing slots are padded.

    Examples
    --------
    >>> parse_prices("97,86,,90").values[:4]
    (97.0, 86.0, None, 90.0)
    """
    parts = re.split(r"[.,]", text.strip()) if text.strip() else []
    if len(parts) > SLOT_COUNT:
        raise MalformedSeries(
            f"Expected at most {SLOT_COUNT} prices, got {len(parts)}."
        )
    values: List[Price] = []
    for part in parts:
        part = part.strip()
        if not part:
            values.append(None)
            continue
        try:
            values.append(optional_price(float(part)))
        except ValueError as e:
            raise InvalidDomain(f"Price {part!r} is not a number.") from e
    values.extend([None] * (SLOT_COUNT - len(values)))
    return InputSeries.from_values(values)
