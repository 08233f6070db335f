from importlib.metadata import PackageNotFoundError, version

from . import lifecycle
from .config import ProcessOptions, load_config
from .exceptions import (
    ConfigError,
    ProcError,
    ProcessFreedError,
    ProcessStateError,
    ProcessStillRunningError,
    SpawnError,
)
from .process import UNSET_FD, UNSET_PID, Process, ProcessState, spawned
from .strarray import StringArray

try:
    __version__ = version("procmanage")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Core classes
    "Process",
    "ProcessState",
    "ProcessOptions",
    "StringArray",
    "spawned",
    "lifecycle",
    "UNSET_FD",
    "UNSET_PID",
    # Config
    "load_config",
    # Exceptions
    "ProcError",
    "ConfigError",
    "SpawnError",
    "ProcessStateError",
    "ProcessFreedError",
    "ProcessStillRunningError",
]
