"""Food entry synchronization between the listing and the remote stores."""

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum

from food_diary.domain.foods import (
    FoodEntry,
    FoodPage,
    FoodRecord,
    ListingQuery,
    Meal,
    PageStep,
)
from food_diary.domain.images import ImageUpload
from food_diary.services.images import BucketImages
from food_diary.services.stores import Document, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


class FoodWriteError(RuntimeError):
    """Raised when a food document could not be written or deleted."""


class FoodReadError(RuntimeError):
    """Raised when food documents could not be fetched."""


class DeleteOutcome(Enum):
    """Result of a delete request."""

    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    DELETED = "deleted"


@dataclass
class FoodService:
    """Keeps food entries consistent across the document and blob stores.

    Writes are two-phase: the image is uploaded first and its public URL is
    then stored on the document. A failed upload aborts before any document
    write; a failed document write leaves the uploaded image orphaned.
    Deletes remove the image best-effort and never block on it.
    """

    documents: DocumentStore
    images: BucketImages
    collection: str = "foods"
    page_size: int = DEFAULT_PAGE_SIZE
    foods: list[FoodRecord] = field(default_factory=list)
    loaded: bool = False
    query: ListingQuery = field(default_factory=ListingQuery)

    def create_food(self, entry: FoodEntry, image: ImageUpload | None) -> str:
        """Upload the optional image, then insert the food document."""
        image_url = self.images.upload(image) if image else ""
        now = datetime.now(tz=UTC).isoformat()
        fields = _entry_fields(entry, image_url)
        fields["created_at"] = now
        fields["updated_at"] = now
        try:
            food_id = self.documents.add(self.collection, fields)
        except Exception as exc:
            _warn_orphan(image_url)
            raise FoodWriteError("Failed to save food entry") from exc
        self.foods.append(
            _record_from_entry(
                food_id, entry, image_url, created_at=now, updated_at=now
            )
        )
        logger.info("Food entry created", extra={"food_id": food_id})
        return food_id

    def update_food(
        self,
        food_id: str,
        entry: FoodEntry,
        image: ImageUpload | None,
        current_image_url: str | None = None,
    ) -> str:
        """Upload a replacement image if given, then overwrite the document.

        Without a new image the previously known URL is kept. ``updated_at``
        is left untouched.
        """
        if image:
            image_url = self.images.upload(image)
        elif current_image_url is not None:
            image_url = current_image_url
        else:
            existing = self.get_food(food_id)
            image_url = existing.image_url if existing else ""
        try:
            self.documents.update(
                self.collection, food_id, _entry_fields(entry, image_url)
            )
        except Exception as exc:
            if image:
                _warn_orphan(image_url)
            raise FoodWriteError(f"Failed to update food entry {food_id}") from exc
        self.foods = [
            _record_from_entry(
                food_id,
                entry,
                image_url,
                created_at=food.created_at,
                updated_at=food.updated_at,
            )
            if food.id == food_id
            else food
            for food in self.foods
        ]
        logger.info("Food entry updated", extra={"food_id": food_id})
        return image_url

    def get_food(self, food_id: str) -> FoodRecord | None:
        """Return a single food entry by id."""
        try:
            document = self.documents.get(self.collection, food_id)
        except Exception as exc:
            raise FoodReadError(f"Failed to fetch food entry {food_id}") from exc
        if document is None:
            return None
        return _parse_food(document)

    def load_foods(self) -> list[FoodRecord]:
        """Fetch the whole collection and replace the in-memory listing."""
        try:
            documents = self.documents.get_all(self.collection)
        except Exception as exc:
            raise FoodReadError("Failed to load food entries") from exc
        self.foods = [_parse_food(document) for document in documents]
        self.loaded = True
        return self.foods

    def navigate(
        self,
        search: str | None = None,
        page: int | None = None,
        step: PageStep | None = None,
    ) -> FoodPage:
        """Move the dashboard view and return the page it now shows.

        A search term different from the current one starts over on the first
        page and ignores ``page``. Previous/Next stay put at the bounds.
        """
        query = self.query
        if search is not None and search != query.search:
            query = query.with_search(search)
        elif page is not None:
            query = replace(query, page=page)
        current = self._page(query)
        if step is PageStep.NEXT:
            current = self._page(_query_of(current).next_page(current.total_pages))
        elif step is PageStep.PREVIOUS:
            current = self._page(_query_of(current).previous_page())
        self.query = _query_of(current)
        return current

    def _page(self, query: ListingQuery) -> FoodPage:
        return paginate(self.foods, query.search, query.page, self.page_size)

    def delete_food(self, food_id: str, confirmed: bool) -> DeleteOutcome:
        """Delete an entry found in the listing, removing its image best-effort."""
        if not confirmed:
            return DeleteOutcome.CANCELLED
        if not self.loaded:
            self.load_foods()
        target = next((food for food in self.foods if food.id == food_id), None)
        if target is None:
            return DeleteOutcome.NOT_FOUND
        if target.image_url:
            self.images.remove_quietly(target.image_url)
        try:
            self.documents.delete(self.collection, food_id)
        except Exception as exc:
            raise FoodWriteError(f"Failed to delete food entry {food_id}") from exc
        self.foods = [food for food in self.foods if food.id != food_id]
        logger.info("Food entry deleted", extra={"food_id": food_id})
        return DeleteOutcome.DELETED


def filter_foods(foods: list[FoodRecord], term: str) -> list[FoodRecord]:
    """Return foods whose name contains the term, ignoring case."""
    needle = term.lower()
    if not needle:
        return list(foods)
    return [food for food in foods if needle in food.food_name.lower()]


def paginate(
    foods: list[FoodRecord],
    term: str,
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> FoodPage:
    """Filter foods by term and slice out one clamped page."""
    filtered = filter_foods(foods, term)
    total_pages = math.ceil(len(filtered) / page_size)
    current = min(max(page, 1), max(1, total_pages))
    start = (current - 1) * page_size
    return FoodPage(
        items=filtered[start : start + page_size],
        search=term,
        page=current,
        page_size=page_size,
        total_items=len(filtered),
        total_pages=total_pages,
    )


def parse_meal(value: object) -> Meal | None:
    """Map a stored meal string to the enum, logging unknown values."""
    if value is None or value == "":
        return None
    try:
        return Meal(str(value))
    except ValueError:
        logger.warning("Unrecognized meal value", extra={"meal": value})
        return None


def _entry_fields(entry: FoodEntry, image_url: str) -> dict[str, object]:
    return {
        "foodname": entry.food_name,
        "meal": entry.meal.value,
        "fooddate_at": entry.date,
        "food_image_url": image_url,
    }


def _parse_food(document: Document) -> FoodRecord:
    fields = document.fields
    created_at = fields.get("created_at")
    updated_at = fields.get("updated_at")
    return FoodRecord(
        id=document.id,
        food_name=str(fields.get("foodname") or ""),
        meal=parse_meal(fields.get("meal")),
        date=str(fields.get("fooddate_at") or ""),
        image_url=str(fields.get("food_image_url") or ""),
        created_at=str(created_at) if created_at else None,
        updated_at=str(updated_at) if updated_at else None,
    )


def _warn_orphan(image_url: str) -> None:
    if image_url:
        logger.warning(
            "Uploaded image left without a document", extra={"image_url": image_url}
        )


def _record_from_entry(
    food_id: str,
    entry: FoodEntry,
    image_url: str,
    created_at: str | None,
    updated_at: str | None,
) -> FoodRecord:
    return FoodRecord(
        id=food_id,
        food_name=entry.food_name,
        meal=entry.meal,
        date=entry.date,
        image_url=image_url,
        created_at=created_at,
        updated_at=updated_at,
    )


def _query_of(page: FoodPage) -> ListingQuery:
    return ListingQuery(search=page.search, page=page.page)
