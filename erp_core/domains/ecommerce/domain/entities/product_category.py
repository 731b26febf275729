"""
Product Category Entity

Hierarchical catalog category addressed by a slash-separated path
("/electronics/computers/laptops").
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from erp_core.config.settings import get_settings
from erp_core.core.domain import AggregateRoot, InvalidArgumentException, ValidationException, generate_uuid
from erp_core.core.shared.clock import Clock, system_clock
from erp_core.core.shared.validators import FieldValidator

from .. import validators as catalog_rules

CATEGORY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_/]+$")
PATH_SEGMENT_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")


def slugify(name: str) -> str:
    return name.strip().replace(" ", "-").lower()


@dataclass(eq=False)
class ProductCategory(AggregateRoot[UUID]):
    """
    Category aggregate root.

    A root category has no parent and level 0; its path is "/<slug>".
    Moving a category changes its own path only; the paths of its children
    are recalculated by the caller.
    """

    name: str = ""
    description: str | None = None
    parent_id: UUID | None = None
    level: int = 0
    path: str = ""
    image_url: str | None = None
    sort_order: int = 0
    is_active: bool = True
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None

    # Validation

    def collect_errors(self) -> list[str]:
        v = FieldValidator()
        v.not_nil(self.id, "category ID")
        self._check_details(v, self.name, self.description)
        v.non_negative(self.level, "level")
        self._check_path(v)
        catalog_rules.check_image_url(v, self.image_url, 500)
        v.non_negative(self.sort_order, "sort order")
        self._check_seo(v, self.seo_title, self.seo_description, self.seo_keywords)
        if self.parent_id is not None:
            v.not_nil(self.parent_id, "parent ID")
            v.check(self.parent_id != self.id, "category cannot be its own parent")
        return v.errors

    def validate(self) -> None:
        errors = self.collect_errors()
        if errors:
            raise ValidationException("category validation failed: " + "; ".join(errors), errors=errors)

    @staticmethod
    def _check_details(v: FieldValidator, name: str, description: str | None) -> None:
        v.required_text(
            name.strip() if name else name,
            200,
            "category name",
            CATEGORY_NAME_PATTERN,
            "category name can only contain letters, numbers, spaces, hyphens, underscores, and forward slashes",
        )
        v.max_length(description.strip() if description else description, 1000, "category description")

    def _check_path(self, v: FieldValidator) -> None:
        path = self.path.strip() if self.path else ""
        if not path:
            v.check(self.parent_id is not None, "root category path cannot be empty")
            return
        if not v.check(path.startswith("/"), "path must start with forward slash"):
            return
        if not v.check(not path.endswith("/"), "path cannot end with forward slash"):
            return
        for segment in path.strip("/").split("/"):
            if not v.check(bool(segment.strip()), "path cannot contain empty segments"):
                return
            if not v.check(
                PATH_SEGMENT_PATTERN.match(segment) is not None,
                "path segments can only contain letters, numbers, hyphens, and underscores",
            ):
                return
        v.max_length(path, 500, "path")

    @staticmethod
    def _check_seo(v: FieldValidator, title: str | None, description: str | None, keywords: str | None) -> None:
        v.max_length(title, 200, "SEO title")
        v.max_length(description, 300, "SEO description")
        v.max_length(keywords, 500, "SEO keywords")

    # Hierarchy

    def is_root(self) -> bool:
        return self.parent_id is None

    def is_child_of(self, parent_id: UUID) -> bool:
        return self.parent_id is not None and self.parent_id == parent_id

    @property
    def depth(self) -> int:
        return self.level

    def can_have_children(self, max_depth: int | None = None) -> bool:
        """Categories at MAX_CATEGORY_DEPTH or deeper cannot have children."""
        if max_depth is None:
            max_depth = get_settings().MAX_CATEGORY_DEPTH
        return self.level < max_depth

    def build_path(self, parent_path: str = "") -> None:
        """
        Derive path and level from the name and the parent's path.

        A child of "/electronics" named "Smart Phones" gets path
        "/electronics/smart-phones" and level 1.
        """
        slug = slugify(self.name)
        if self.parent_id is None:
            self.path = f"/{slug}"
            self.level = 0
        else:
            self.path = f"{parent_path}/{slug}"
            self.level = parent_path.count("/")

    @property
    def path_segments(self) -> list[str]:
        if not self.path:
            return []
        return self.path.strip("/").split("/")

    def move_to_parent(self, new_parent_id: UUID | None, new_parent_path: str = "") -> bool:
        """
        Re-parent the category and rebuild its path.

        Returns:
            True when the parent actually changed, meaning the paths of all
            descendants must be recalculated by the caller

        Raises:
            InvalidArgumentException: If the category would become its own parent
        """
        if new_parent_id is not None and new_parent_id == self.id:
            raise InvalidArgumentException("new_parent_id", "category cannot be moved to be its own parent")

        old_parent_id = self.parent_id
        self.parent_id = new_parent_id
        self.build_path(new_parent_path)
        self.touch()
        return old_parent_id != new_parent_id

    # Mutators

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def update_sort_order(self, new_order: int) -> None:
        if new_order < 0:
            raise ValidationException("sort order cannot be negative", field="sort_order")
        self.sort_order = new_order
        self.touch()

    def update_image(self, image_url: str | None) -> None:
        v = FieldValidator()
        catalog_rules.check_image_url(v, image_url, 500)
        v.raise_if_invalid("invalid image URL")
        self.image_url = image_url or None
        self.touch()

    def update_details(self, name: str, description: str | None = None) -> None:
        v = FieldValidator()
        self._check_details(v, name, description)
        v.raise_if_invalid("invalid category details")
        self.name = name
        self.description = description
        self.touch()

    def update_seo_fields(
        self, title: str | None = None, description: str | None = None, keywords: str | None = None
    ) -> None:
        v = FieldValidator()
        self._check_seo(v, title, description, keywords)
        v.raise_if_invalid("invalid SEO fields")
        self.seo_title = title
        self.seo_description = description
        self.seo_keywords = keywords
        self.touch()

    # Projections

    def to_safe_category(self) -> "SafeCategory":
        return SafeCategory.from_category(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "name": self.name,
            "description": self.description,
            "parent_id": str(self.parent_id) if self.parent_id else None,
            "level": self.level,
            "path": self.path,
            "image_url": self.image_url,
            "sort_order": self.sort_order,
            "is_active": self.is_active,
            "seo_title": self.seo_title,
            "seo_description": self.seo_description,
            "seo_keywords": self.seo_keywords,
        }

    # Factory

    @classmethod
    def create(
        cls,
        name: str,
        parent: "ProductCategory | None" = None,
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "ProductCategory":
        """
        Build a category under ``parent`` (or as a root), derive its path and
        validate it.

        Raises:
            ValidationException: If any invariant is violated or the parent
                is too deep to accept children
        """
        if parent is not None and not parent.can_have_children():
            raise ValidationException(
                f"category {parent.name} at level {parent.level} cannot have children", field="parent_id"
            )
        clock = clock or system_clock()
        now = clock.now()
        category = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            name=name,
            parent_id=parent.id if parent is not None else None,
            **attributes,
        )
        category.build_path(parent.path if parent is not None else "")
        category.validate()
        return category


@dataclass(frozen=True)
class SafeCategory:
    """
    Public category projection. Categories hold nothing sensitive; the
    projection exists so callers never hand out the mutable aggregate.
    """

    id: UUID | None
    name: str
    description: str | None
    parent_id: UUID | None
    level: int
    path: str
    image_url: str | None
    sort_order: int
    is_active: bool
    seo_title: str | None
    seo_description: str | None
    seo_keywords: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_category(cls, category: ProductCategory) -> "SafeCategory":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            parent_id=category.parent_id,
            level=category.level,
            path=category.path,
            image_url=category.image_url,
            sort_order=category.sort_order,
            is_active=category.is_active,
            seo_title=category.seo_title,
            seo_description=category.seo_description,
            seo_keywords=category.seo_keywords,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
