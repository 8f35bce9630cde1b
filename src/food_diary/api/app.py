"""FastAPI application factory."""

import logging

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import RedirectResponse

from food_diary.api.forms import read_image
from food_diary.api.schemas import FoodOut, FoodPageOut, ProfileOut
from food_diary.api.session_gate import (
    LOGIN_PATH,
    LoginRequired,
    redirect_to_login,
    require_user,
)
from food_diary.app_logging import configure_logging
from food_diary.containers import AppContainer
from food_diary.domain.foods import FoodEntry, FoodRecord, Meal, PageStep
from food_diary.domain.images import ImageUpload
from food_diary.domain.users import (
    Gender,
    ProfileChanges,
    Registration,
    SessionUser,
    UserProfile,
)
from food_diary.services.foods import DeleteOutcome, FoodReadError, FoodWriteError
from food_diary.services.images import ImageUploadError, ImageValidationError
from food_diary.services.sessions import encode_session
from food_diary.services.users import UserWriteError

DASHBOARD_PATH = "/dashboard"

logger = logging.getLogger(__name__)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    max_image_bytes = container.settings.max_image_bytes

    app = FastAPI()
    app.state.container = container
    app.add_exception_handler(LoginRequired, redirect_to_login)

    @app.get("/")
    async def home() -> dict[str, object]:
        """List the screens of the application."""
        return {
            "app": "Food Diary",
            "screens": {
                "register": "/register",
                "login": LOGIN_PATH,
                "dashboard": DASHBOARD_PATH,
                "add_food": "/foods",
                "profile": "/profile",
            },
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/register")
    async def register(  # noqa: PLR0913
        request: Request,
        full_name: str = Form(min_length=1),
        email: str = Form(min_length=1),
        password: str = Form(min_length=1),
        gender: Gender = Form(),
        image: UploadFile | None = File(default=None),
    ) -> RedirectResponse:
        """Register a user and send them to the login screen."""
        state_container: AppContainer = request.app.state.container
        upload = await _read_image_or_400(image, max_image_bytes)
        registration = Registration(
            full_name=full_name, email=email, password=password, gender=gender
        )
        try:
            state_container.user_service.register(registration, upload)
        except ImageUploadError as exc:
            logger.exception("Avatar upload failed", extra={"email": email})
            raise _upstream_error(
                state_container, exc, "Could not upload the image."
            ) from exc
        except UserWriteError as exc:
            logger.exception("Registration failed", extra={"email": email})
            raise _upstream_error(
                state_container, exc, "Could not complete the registration."
            ) from exc
        return RedirectResponse(LOGIN_PATH, status_code=303)

    @app.post("/login")
    async def login(
        request: Request,
        email: str = Form(min_length=1),
        password: str = Form(min_length=1),
    ) -> RedirectResponse:
        """Check credentials and store the session snapshot in a cookie."""
        state_container: AppContainer = request.app.state.container
        try:
            user = state_container.auth_service.login(email, password)
        except Exception as exc:
            logger.exception("Login lookup failed")
            raise _upstream_error(
                state_container, exc, "Could not log in right now."
            ) from exc
        if user is None:
            raise HTTPException(status_code=401, detail="Invalid email or password.")
        response = RedirectResponse(DASHBOARD_PATH, status_code=303)
        _write_session_cookie(state_container, response, user)
        return response

    @app.get(DASHBOARD_PATH, dependencies=[Depends(require_user)])
    async def dashboard(
        request: Request,
        search: str | None = None,
        page: int | None = None,
        step: PageStep | None = None,
    ) -> FoodPageOut:
        """Fetch every food entry and return the page the view moved to."""
        state_container: AppContainer = request.app.state.container
        food_service = state_container.food_service
        try:
            food_service.load_foods()
        except FoodReadError as exc:
            logger.exception("Failed to load food entries")
            raise _upstream_error(
                state_container, exc, "Could not load your food entries."
            ) from exc
        return FoodPageOut.from_page(food_service.navigate(search, page, step))

    @app.post("/foods", dependencies=[Depends(require_user)])
    async def add_food(
        request: Request,
        food_name: str = Form(min_length=1),
        meal: Meal = Form(),
        date: str = Form(min_length=1),
        image: UploadFile | None = File(default=None),
    ) -> RedirectResponse:
        """Create a food entry, uploading its picture first."""
        state_container: AppContainer = request.app.state.container
        upload = await _read_image_or_400(image, max_image_bytes)
        entry = FoodEntry(food_name=food_name, meal=meal, date=date)
        try:
            state_container.food_service.create_food(entry, upload)
        except ImageUploadError as exc:
            logger.exception("Food image upload failed")
            raise _upstream_error(
                state_container, exc, "Could not upload the image."
            ) from exc
        except FoodWriteError as exc:
            logger.exception("Failed to save food entry")
            raise _upstream_error(
                state_container, exc, "Could not save the food entry."
            ) from exc
        return RedirectResponse(DASHBOARD_PATH, status_code=303)

    @app.get("/foods/{food_id}", dependencies=[Depends(require_user)])
    async def get_food(food_id: str, request: Request) -> FoodOut:
        """Return a food entry for the edit screen."""
        state_container: AppContainer = request.app.state.container
        food = _load_food_or_404(state_container, food_id)
        return FoodOut.from_record(food)

    @app.post("/foods/{food_id}", dependencies=[Depends(require_user)])
    async def update_food(  # noqa: PLR0913
        food_id: str,
        request: Request,
        food_name: str = Form(min_length=1),
        meal: Meal = Form(),
        date: str = Form(min_length=1),
        image: UploadFile | None = File(default=None),
    ) -> RedirectResponse:
        """Update a food entry, keeping its picture unless a new one is sent."""
        state_container: AppContainer = request.app.state.container
        current = _load_food_or_404(state_container, food_id)
        upload = await _read_image_or_400(image, max_image_bytes)
        entry = FoodEntry(food_name=food_name, meal=meal, date=date)
        try:
            state_container.food_service.update_food(
                food_id, entry, upload, current_image_url=current.image_url
            )
        except ImageUploadError as exc:
            logger.exception("Food image upload failed", extra={"food_id": food_id})
            raise _upstream_error(
                state_container, exc, "Could not upload the image."
            ) from exc
        except FoodWriteError as exc:
            logger.exception("Failed to update food entry", extra={"food_id": food_id})
            raise _upstream_error(
                state_container, exc, "Could not update the food entry."
            ) from exc
        return RedirectResponse(DASHBOARD_PATH, status_code=303)

    @app.delete("/foods/{food_id}", dependencies=[Depends(require_user)])
    async def delete_food(
        food_id: str, request: Request, confirm: bool = False
    ) -> dict[str, str]:
        """Delete a food entry after confirmation."""
        state_container: AppContainer = request.app.state.container
        try:
            outcome = state_container.food_service.delete_food(
                food_id, confirmed=confirm
            )
        except (FoodReadError, FoodWriteError) as exc:
            logger.exception("Failed to delete food entry", extra={"food_id": food_id})
            raise _upstream_error(
                state_container, exc, "Could not delete the food entry."
            ) from exc
        if outcome is DeleteOutcome.NOT_FOUND:
            raise HTTPException(status_code=404, detail="Food entry not found.")
        return {"status": outcome.value}

    @app.get("/profile", response_model=None)
    async def profile(
        request: Request, user: SessionUser = Depends(require_user)
    ) -> ProfileOut | RedirectResponse:
        """Return the stored profile of the logged-in user."""
        state_container: AppContainer = request.app.state.container
        stored = _load_profile(state_container, user.id)
        if stored is None:
            return RedirectResponse(LOGIN_PATH, status_code=303)
        return ProfileOut.from_profile(stored)

    @app.post("/profile")
    async def update_profile(  # noqa: PLR0913
        request: Request,
        full_name: str = Form(min_length=1),
        email: str = Form(min_length=1),
        gender: Gender = Form(),
        password: str = Form(default=""),
        image: UploadFile | None = File(default=None),
        user: SessionUser = Depends(require_user),
    ) -> RedirectResponse:
        """Save profile changes and refresh the session snapshot."""
        state_container: AppContainer = request.app.state.container
        stored = _load_profile(state_container, user.id)
        if stored is None:
            return RedirectResponse(LOGIN_PATH, status_code=303)
        upload = await _read_image_or_400(image, max_image_bytes)
        changes = ProfileChanges(
            full_name=full_name,
            email=email,
            gender=gender,
            password=password or None,
        )
        try:
            updated = state_container.user_service.update_profile(
                stored, changes, upload
            )
        except ImageUploadError as exc:
            logger.exception("Avatar upload failed", extra={"user_id": user.id})
            raise _upstream_error(
                state_container, exc, "Could not upload the image."
            ) from exc
        except UserWriteError as exc:
            logger.exception("Failed to update profile", extra={"user_id": user.id})
            raise _upstream_error(
                state_container, exc, "Could not update the profile."
            ) from exc
        response = RedirectResponse(DASHBOARD_PATH, status_code=303)
        _write_session_cookie(
            state_container, response, SessionUser.from_profile(updated)
        )
        return response

    return app


async def _read_image_or_400(
    upload: UploadFile | None, max_bytes: int
) -> ImageUpload | None:
    try:
        return await read_image(upload, max_bytes)
    except ImageValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _load_food_or_404(state_container: AppContainer, food_id: str) -> FoodRecord:
    try:
        food = state_container.food_service.get_food(food_id)
    except FoodReadError as exc:
        logger.exception("Failed to fetch food entry", extra={"food_id": food_id})
        raise _upstream_error(
            state_container, exc, "Could not load the food entry."
        ) from exc
    if food is None:
        raise HTTPException(status_code=404, detail="Food entry not found.")
    return food


def _load_profile(state_container: AppContainer, user_id: str) -> UserProfile | None:
    try:
        return state_container.user_service.get_profile(user_id)
    except Exception as exc:
        logger.exception("Failed to fetch profile", extra={"user_id": user_id})
        raise _upstream_error(
            state_container, exc, "Could not load the profile."
        ) from exc


def _write_session_cookie(
    state_container: AppContainer, response: RedirectResponse, user: SessionUser
) -> None:
    """Persist the session snapshot client-side."""
    response.set_cookie(
        key=state_container.settings.session_cookie_name,
        value=encode_session(user),
        httponly=True,
        samesite="lax",
    )


def _upstream_error(
    state_container: AppContainer, exc: Exception, fallback: str
) -> HTTPException:
    """Return a user-facing store error with local debug info."""
    return HTTPException(
        status_code=502, detail=_format_error(state_container, exc, fallback)
    )


def _format_error(state_container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
