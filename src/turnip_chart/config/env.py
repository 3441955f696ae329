# stdlib
import os
from pathlib import Path
# thirdpartylib
from dotenv import load_dotenv

def fetch_var(name: str) -> str:
    """Fetch a required environment variable or fail loudly."""
    try:
        value = os.environ[name].strip()
        if not value:
            raise RuntimeError(
                f"Environment variable '{name}' is empty."
            )
        return value
    except KeyError as e:
        raise RuntimeError(
            f"Environment variable '{name}' is not set. "
            "Create a .env file or define the variable."
        ) from e

def fetch_optional(name: str, default: str) -> str:
    """Fetch an environment variable, falling back to ``default``."""
    if not os.environ.get(name, "").strip():
        return default
    return fetch_var(name)

def fetch_float(name: str, default: float) -> float:
    """Fetch a numeric environment variable, failing on bad values."""
    raw = fetch_optional(name, str(default))
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(
            f"Environment variable '{name}' must be numeric, got {raw!r}."
        ) from e


# Load env variables
load_dotenv()

CHART_WIDTH = fetch_float("CHART_WIDTH", 1000.0)
CHART_FONT_FAMILY = fetch_optional(
    "CHART_FONT_FAMILY", "Varela Round, sans-serif"
)
CHART_OUTPUT_DIR = Path(fetch_optional("CHART_OUTPUT_DIR", str(Path.cwd())))
