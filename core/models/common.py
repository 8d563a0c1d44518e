# =============================================================================
# core/models/common.py - Shared Listing & Request Models
# =============================================================================
# These models are shared by the Project, Task and User resources:
# - Status: the three-value status enum used by projects and tasks
# - SortDirection: asc/desc
# - ListQuery: filter/sort/page parameters of one listing request
# - RequestContext: who is asking and with which listing parameters
# - ImageUpload: an uploaded image, already read into memory
#
# Services receive a RequestContext explicitly instead of reaching for a
# global "current user" or "current request".
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from lib.utils import drop_blank


class Status(str, Enum):
    """
    Status of a project or task.

    Any status may change to any other; there is no workflow.
    """
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class ListQuery(BaseModel):
    """
    Filter, sort and page parameters for one listing request.

    Blank values are dropped before validation, so `?name=` behaves exactly
    like a request without `name` and `?sort_field=` falls back to the default.

    Example:
        ListQuery(name="launch", sort_field="due_date", sort_direction="asc")
    """

    name: str | None = Field(default=None, description="Case-insensitive name substring")
    status: str | None = Field(default=None, description="Exact status match")
    email: str | None = Field(default=None, description="Case-insensitive email substring (users only)")
    sort_field: str = Field(default="created_at", description="Column to order by")
    sort_direction: str = Field(default=SortDirection.DESC.value, description="asc or desc")
    page: int = Field(default=1, ge=1, description="1-indexed page number")

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return drop_blank(data)
        return data

    def with_sort(self, sort_field: str) -> "ListQuery":
        """
        Return the query a click on a column header produces.

        Clicking the current column flips asc to desc; any other click sorts
        the chosen column ascending. The page resets to 1.
        """
        if self.sort_field == sort_field and self.sort_direction == SortDirection.ASC.value:
            direction = SortDirection.DESC.value
        else:
            direction = SortDirection.ASC.value
        return self.model_copy(update={"sort_field": sort_field, "sort_direction": direction, "page": 1})


@dataclass(frozen=True)
class RequestContext:
    """The authenticated user and listing parameters of one request."""
    user_id: int
    query: ListQuery = field(default_factory=ListQuery)


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file. Validation happens before one is built."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
