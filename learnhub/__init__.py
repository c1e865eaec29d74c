"""LearnHub - course marketplace client core.

Catalog browsing, cart pricing, lecture progress tracking and a lecture
player for the LearnHub course marketplace backend.

Quick Start:
    ```python
    from learnhub import LearnHubClient, LearnHubSession

    session = LearnHubSession(LearnHubClient())
    await session.start()
    page = await session.catalog.search("react")
    print(session.cart.totals())
    await session.close()
    ```

CLI Usage:
    ```bash
    python -m learnhub
    python -m learnhub --catalog courses.json
    ```
"""

__version__ = "1.0.0"

# Core
from learnhub.core import LearnHubSession

# Services
from learnhub.services import (
    LearnHubClient,
    LecturePlayer,
    compute_cart_totals,
    calculate_progress,
    filter_and_sort,
)

# Formatting
from learnhub.utils import format_duration

# Models
from learnhub.models import (
    Course,
    Lecture,
    Section,
    CartLineItem,
    CartTotals,
    CourseFilters,
    CoursePage,
    EnrollmentRecord,
    SessionState,
)

# Configuration
from learnhub.config import settings

# Exceptions
from learnhub.exceptions import (
    LearnHubError,
    ConfigurationError,
    ApiError,
    DataError,
    CourseNotFoundError,
    LectureNotFoundError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "LearnHubSession",
    # Services
    "LearnHubClient",
    "LecturePlayer",
    "compute_cart_totals",
    "calculate_progress",
    "filter_and_sort",
    "format_duration",
    # Models
    "Course",
    "Lecture",
    "Section",
    "CartLineItem",
    "CartTotals",
    "CourseFilters",
    "CoursePage",
    "EnrollmentRecord",
    "SessionState",
    # Config
    "settings",
    # Exceptions
    "LearnHubError",
    "ConfigurationError",
    "ApiError",
    "DataError",
    "CourseNotFoundError",
    "LectureNotFoundError",
]
