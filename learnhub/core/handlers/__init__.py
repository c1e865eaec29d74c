"""View handlers for LearnHub.

Each handler owns the I/O and state updates for one area of the client.
"""

from learnhub.core.handlers.catalog import CatalogHandler
from learnhub.core.handlers.cart import CartHandler
from learnhub.core.handlers.learning import LearningHandler
from learnhub.core.handlers.dashboard import DashboardHandler
from learnhub.core.handlers.instructor import InstructorHandler

__all__ = [
    "CatalogHandler",
    "CartHandler",
    "LearningHandler",
    "DashboardHandler",
    "InstructorHandler",
]
