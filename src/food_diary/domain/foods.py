"""Domain models for food entries."""

from dataclasses import dataclass
from enum import Enum


class Meal(str, Enum):
    """Meal a food entry belongs to."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class FoodEntry:
    """User-supplied fields of a food entry."""

    food_name: str
    meal: Meal
    date: str


@dataclass(frozen=True)
class FoodRecord:
    """Represents a food entry stored in the document store."""

    id: str
    food_name: str
    meal: Meal | None
    date: str
    image_url: str = ""
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class FoodPage:
    """One page of the filtered food listing."""

    items: list[FoodRecord]
    search: str
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        """Return true when a previous page exists."""
        return self.page > 1

    @property
    def has_next(self) -> bool:
        """Return true when a next page exists."""
        return self.page < self.total_pages


@dataclass(frozen=True)
class ListingQuery:
    """Search term and page currently shown on the dashboard."""

    search: str = ""
    page: int = 1

    def with_search(self, term: str) -> "ListingQuery":
        """Issue a new search, which always starts from the first page."""
        return ListingQuery(search=term, page=1)

    def next_page(self, total_pages: int) -> "ListingQuery":
        """Move forward one page, staying put on the last page."""
        if self.page >= total_pages:
            return self
        return ListingQuery(search=self.search, page=self.page + 1)

    def previous_page(self) -> "ListingQuery":
        """Move back one page, staying put on the first page."""
        if self.page <= 1:
            return self
        return ListingQuery(search=self.search, page=self.page - 1)


class PageStep(str, Enum):
    """Previous/Next buttons of the dashboard pager."""

    PREVIOUS = "previous"
    NEXT = "next"
