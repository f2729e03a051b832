"""Personal task lists with manual ordering, undo and crash-safe storage."""

from tasklists.config import VERSION
from tasklists.service import TaskService

__version__ = VERSION

__all__ = ["TaskService", "__version__"]
