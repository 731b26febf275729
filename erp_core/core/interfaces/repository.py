"""
Base repository interfaces (data access contracts)

The domain core ships no persistence. These protocols describe what it
expects from a persistence collaborator, following the Repository pattern
and the Dependency Inversion Principle.
"""

import math
from abc import abstractmethod
from typing import Any, Generic, Literal, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")  # Entity type
ID = TypeVar("ID")  # ID type
F = TypeVar("F", contravariant=True)  # Filter type


class ListFilter(BaseModel):
    """
    Common pagination and sorting parameters for list/count queries.

    Entity-specific filters extend it with their own criteria.
    """

    search: str | None = Field(None, description="Free-text search string")
    page: int = Field(1, ge=1, description="1-based page number")
    limit: int = Field(20, ge=1, le=100, description="Page size")
    sort_by: str = Field("created_at", description="Field to sort by")
    sort_order: Literal["asc", "desc"] = Field("desc", description="Sort direction")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel):
    """
    One page of results returned by a repository ``list`` call.

    Example:
        ```python
        page = Page.build(items=orders, total_count=57, page=2, limit=20)
        page.total_pages  # 3
        page.has_next     # True
        ```
    """

    items: list[Any] = Field(default_factory=list)
    total_count: int = Field(0, ge=0)
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit) if self.total_count else 0

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @classmethod
    def build(cls, items: list[Any], total_count: int, page: int = 1, limit: int = 20) -> "Page":
        return cls(items=list(items), total_count=total_count, page=page, limit=limit)

    @classmethod
    def for_filter(cls, items: list[Any], total_count: int, list_filter: ListFilter) -> "Page":
        return cls.build(items, total_count, page=list_filter.page, limit=list_filter.limit)


@runtime_checkable
class IRepository(Protocol, Generic[T, ID, F]):
    """
    Base contract for all entity repositories.

    Repositories enforce uniqueness (sku, customer code, order number); the
    domain core does not.

    Type Parameters:
        T: Entity type handled by the repository
        ID: Entity identifier type
        F: Filter model accepted by ``list`` and ``count``
    """

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new entity"""
        ...

    @abstractmethod
    async def get_by_id(self, id: ID) -> T | None:
        """Return the entity or None when it does not exist"""
        ...

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Persist changes to an existing entity"""
        ...

    @abstractmethod
    async def delete(self, id: ID) -> bool:
        """Delete by id, returning True when something was deleted"""
        ...

    @abstractmethod
    async def list(self, filter: F) -> Page:
        """Return one page of entities matching the filter"""
        ...

    @abstractmethod
    async def count(self, filter: F) -> int:
        """Count entities matching the filter"""
        ...


@runtime_checkable
class IIdGenerator(Protocol):
    """Source of fresh entity identifiers."""

    def new_id(self) -> UUID:
        """Return a new 128-bit identifier"""
        ...
