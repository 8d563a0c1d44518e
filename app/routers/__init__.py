# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - projects.py: Project listing and CRUD
# - tasks.py: Task listing, "my tasks" and CRUD
# - users.py: User listing and CRUD
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import tasks
from . import users

__all__ = [
    "health",
    "projects",
    "tasks",
    "users",
]
