# stdlib
from pathlib import Path
from datetime import datetime
from typing import Optional
# projectlib
from turnip_chart.utils.typing import Address, OpenMode

def validate_address(
    address: Address,
    *,
    extension: str = ".json",
    mode: OpenMode = "r",
    filename: Optional[str] = None,
    mkdir: bool = False,
) -> Path:
    """
    Resolve the file a loader, chart writer or logger should use.

    Parameters
    ----------
    address : Address
        File path, or a directory when ``filename`` is given.
    extension : str, default ".json"
        Suffix the resolved file must carry; a different suffix is
        replaced.
    mode : OpenMode, default "r"
        ``"r"`` requires the file to exist. ``"w"`` picks a timestamped
        name next to an existing file so earlier output survives.
        ``"a"`` appends to the file whether or not it exists.
    filename : str, optional
        Name used inside ``address`` when it is a directory. Without it
        a directory address is rejected.
    mkdir : bool, default False
        Create a directory ``address`` (and its parents) first. Only
        meaningful together with ``filename``.

    Returns
    -------
    pathlib.Path
        Path of the file to open.

    Raises
    ------
    IsADirectoryError
        If ``address`` is a directory and no ``filename`` is given.
    NotADirectoryError
        If the directory of the file does not exist.
    FileNotFoundError
        If ``mode="r"`` and the file does not exist.
    """
    address = Path(address)
    if mkdir and filename is not None:
        address.mkdir(parents=True, exist_ok=True)
    if address.is_dir():
        if filename is None:
            raise IsADirectoryError(f"{address} is a directory, not a file.")
        address = address / filename
    if not address.parent.is_dir():
        raise NotADirectoryError(
            f"Directory {address.parent} does not exist."
        )
    if address.suffix != extension:
        address = address.with_suffix(extension)
    if mode == "r" and not address.is_file():
        raise FileNotFoundError(f"{address} does not exist.")
    if mode == "w" and address.exists():
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        address = address.with_name(f"{address.stem}_{stamp}{address.suffix}")
    return address
