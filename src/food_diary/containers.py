"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_diary.adapters.supabase_blob_store import SupabaseBlobStore
from food_diary.adapters.supabase_document_store import SupabaseDocumentStore
from food_diary.config import Settings
from food_diary.services.auth import AuthService
from food_diary.services.foods import FoodService
from food_diary.services.images import BucketImages
from food_diary.services.stores import BlobStore, DocumentStore
from food_diary.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    user_service: UserService
    auth_service: AuthService


def build_services(
    settings: Settings, documents: DocumentStore, blobs: BlobStore
) -> AppContainer:
    """Wire services on top of the given store clients."""
    food_service = FoodService(
        documents=documents,
        images=BucketImages(blobs, settings.food_bucket),
        collection=settings.foods_collection,
        page_size=settings.page_size,
    )
    user_service = UserService(
        documents=documents,
        images=BucketImages(blobs, settings.user_bucket),
        collection=settings.users_collection,
    )
    auth_service = AuthService(
        documents=documents,
        collection=settings.users_collection,
    )
    return AppContainer(
        settings=settings,
        food_service=food_service,
        user_service=user_service,
        auth_service=auth_service,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return build_services(
        resolved_settings,
        documents=SupabaseDocumentStore(supabase_client),
        blobs=SupabaseBlobStore(supabase_client),
    )
