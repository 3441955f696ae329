# stdlib
from pathlib import Path
from datetime import datetime
from typing import Optional
from types import TracebackType
# projectlib
from turnip_chart.utils.paths import validate_address
from turnip_chart.utils.typing import Verbosity, Address

class Logger(object):
    """
    Lightweight callable logger with optional file persistence.

    Messages are filtered against a verbosity threshold and either
    printed to stdout or appended to ``log.txt`` in a log directory.
    The chart transform and the rendering script share one instance per
    update so a single ``--verbosity`` flag controls everything.
    """

    def __init__(
        self,
        verbose: Verbosity = 0,
        log_dir: Address = Path.cwd(),
        write_log: bool = False
    ) -> None:
        """
        Initialize the logger.

        Parameters
        ----------
        verbose : Verbosity, default 0
            Verbosity threshold. Messages with a verbosity level less
            than or equal to this value will be emitted.
        log_dir : Address, default Path.cwd()
            Directory in which the log file will be written if
            `write_log` is True. The file name is fixed as `log.txt`.
        write_log : bool, default False
            If True, messages are appended to a log file. If False,
            messages are printed to stdout.
        """
        self.verbose = verbose
        # Resolve the log file, only touching the disk when writing
        self.log_path = (
            validate_address(
                log_dir,
                extension=".txt",
                mode="a",
                filename="log.txt",
                mkdir=True,
            )
            if write_log else Path(log_dir) / "log.txt"
        )
        self.write_log = write_log

    def __call__(self, msg: str, verbosity: int = 0) -> None:
        """
        Emit a log message if the verbosity threshold is met.

        Parameters
        ----------
        msg : str
            Message to be logged.
        verbosity : int, default 0
            Verbosity level associated with the message. The message
            is emitted only if `self.verbose >= verbosity`.
        """
        if self.verbose >= verbosity:
            formatted = self._format(msg)
            if self.write_log:
                self.write(formatted)
            else:
                print(formatted)

    def write(self, msg: str) -> None:
        """Append a formatted message to the log file."""
        with open(self.log_path, "a", encoding="utf-8") as file:
            file.write(msg + "\n")
    
    def _format(self, msg: str) -> str:
        ts = datetime.now().isoformat(timespec="seconds")
        return f"[{ts}] {msg}"
    
    def __enter__(self) -> "Logger":
        return self

    def __exit__(
            self, 
            exc_type: Optional[type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
        ) -> None:
        pass
