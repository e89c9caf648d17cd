from importlib.resources import files

from .collection import IntervalCollection
from .errors import EndBeforeStart, PeriodError, PrecisionMismatch
from .interval import Interval
from .log import setup_logging
from .precision import Precision
from .settings import Settings, get_settings

# Packaged docs, readable without a source checkout
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Interval",
    "IntervalCollection",
    "Precision",
    "PeriodError",
    "EndBeforeStart",
    "PrecisionMismatch",
    "Settings",
    "get_settings",
    "setup_logging",
    "docs",
]
