# stdlib
from typing import Literal, Union, Optional, Sequence, Tuple
from pathlib import Path

# Verbosity for classes, functions, methods, etc.
type Verbosity = Literal[0, 1, 2]
# Mode for opening documents
type ReadMode = Literal["r"]
type WriteMode = Literal["w", "a"]
type OpenMode = Literal[ReadMode, WriteMode]
# Type alias for file/folder paths
type Address = Union[str, Path]
# A single observed price, None when the slot has not been observed yet
type Price = Optional[float]
# Flat 13-slot price list as entered by the user
type PriceList = Sequence[Price]
# Raw {min, max} record as produced by the upstream predictor
type RangeRecord = Union[Tuple[float, float], dict[str, float]]
# Chart margins in pixels
type Margin = Literal["top", "right", "bottom", "left"]
# Kinds of drawable primitives
type PrimitiveKind = Literal["bar", "extent", "input"]
