"""Pydantic response models for the HTTP screens."""

from pydantic import BaseModel

from food_diary.domain.foods import FoodPage, FoodRecord
from food_diary.domain.users import UserProfile


class FoodOut(BaseModel):
    """Food entry as shown on the dashboard and the edit screen."""

    id: str
    food_name: str
    meal: str | None
    date: str
    image_url: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_record(cls, record: FoodRecord) -> "FoodOut":
        return cls(
            id=record.id,
            food_name=record.food_name,
            meal=record.meal.value if record.meal else None,
            date=record.date,
            image_url=record.image_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class FoodPageOut(BaseModel):
    """Dashboard listing page."""

    items: list[FoodOut]
    search: str
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @classmethod
    def from_page(cls, page: FoodPage) -> "FoodPageOut":
        return cls(
            items=[FoodOut.from_record(item) for item in page.items],
            search=page.search,
            page=page.page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
            has_previous=page.has_previous,
            has_next=page.has_next,
        )


class ProfileOut(BaseModel):
    """Profile screen payload; the password is never echoed back."""

    id: str
    full_name: str
    email: str
    gender: str | None
    image_url: str

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileOut":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            gender=profile.gender.value if profile.gender else None,
            image_url=profile.image_url,
        )
