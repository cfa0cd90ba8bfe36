"""Topic definitions for the retrier CLI help system."""

from .help_topic import HELP
from .overview import OVERVIEW
from .policies import POLICIES
from .settings import SETTINGS

TOPICS: dict[str, str] = {
    "help": HELP,
    "overview": OVERVIEW,
    "policies": POLICIES,
    "settings": SETTINGS,
}

__all__ = ["TOPICS"]
