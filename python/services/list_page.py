"""
List page controllers (Exercises, Methods).

A ListPage loads a collection through the ApiClient, filters it by a
search term, paginates the filtered list and runs the card actions
(view / edit / delete / save). Feedback goes through a Notifier.

State: idle -> loading -> loaded | errored
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.logging import get_logger
from models.domain.exercise import Exercise, Method
from services.api_client import ApiClient, ApiError, CancelToken, RequestCancelledError
from services.pagination import Paginator, filter_items

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]


class PageState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"  # default | destructive


class Notifier:
    """Toast-style notifications; keeps history and forwards to an optional sink."""

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None):
        self.history: List[Notification] = []
        self._sink = sink

    def notify(self, title: str, description: str, variant: str = "default") -> Notification:
        notification = Notification(title, description, variant)
        self.history.append(notification)
        if self._sink is not None:
            self._sink(notification)
        return notification

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None


def deny_all(prompt: str) -> bool:
    """Default confirmation: nothing is deleted without an explicit callback."""
    return False


class ListPage(Generic[T]):
    """
    Base controller. Subclasses set endpoint, item_class and labels.
    """

    endpoint: str = ""
    item_class: Type[T] = None
    singular: str = "item"
    plural: str = "items"
    search_fields = ("name", "description")

    def __init__(
        self,
        api: ApiClient,
        notifier: Optional[Notifier] = None,
        confirm: Optional[ConfirmCallback] = None,
        page_size: int = 12,
    ):
        self.api = api
        self.notifier = notifier or Notifier()
        self.confirm = confirm or deny_all

        self.state = PageState.IDLE
        self.items: List[T] = []
        self.last_error: Optional[ApiError] = None
        self.search_term = ""
        self.paginator: Paginator[T] = Paginator(page_size=page_size)

        # Dialog targets
        self.selected: Optional[T] = None
        self.editing: Optional[T] = None
        self.dialog_open = False

        self._load_token: Optional[CancelToken] = None

    # === Derived view ===

    @property
    def is_loading(self) -> bool:
        return self.state == PageState.LOADING

    @property
    def filtered_items(self) -> List[T]:
        return filter_items(self.items, self.search_term, self.search_fields)

    @property
    def current_page_items(self) -> List[T]:
        return self.paginator.current_page_items

    @property
    def delete_prompt(self) -> str:
        return f"Are you sure you want to delete this {self.singular}?"

    # === Data ===

    async def load(self) -> None:
        """
        Fetch the whole list. Failures notify the user and keep the
        previous items; there is no retry.

        Starting a load cancels the one still in flight, so only the
        latest response is applied. The current page is kept (clamped
        to the new page count).
        """
        if self._load_token is not None:
            self._load_token.cancel()
        self.state = PageState.LOADING
        self._load_token = token = CancelToken()
        try:
            data = await self.api.get(self.endpoint, cancel_token=token)
        except RequestCancelledError:
            logger.debug(f"Loading {self.plural} cancelled")
            if self._load_token is token:
                self.state = PageState.LOADED if self.items else PageState.IDLE
            return
        except ApiError as e:
            if self._load_token is not token:
                return
            logger.error(f"Could not load {self.plural}: {e.message}")
            self.last_error = e
            self.state = PageState.ERRORED
            self.notifier.notify("Error", f"Could not load the {self.plural}.", variant="destructive")
            return
        finally:
            superseded = self._load_token is not token
            if not superseded:
                self._load_token = None

        if superseded:
            logger.debug(f"Discarding superseded {self.plural} response")
            return
        page = self.paginator.current_page
        self.items = self._parse_items(data)
        self.last_error = None
        self.paginator.set_items(self.filtered_items)
        self.paginator.set_page(page)
        self.state = PageState.LOADED
        logger.debug(f"Loaded {len(self.items)} {self.plural}")

    def close(self) -> None:
        """Cancel an in-flight load (page unmounted)."""
        if self._load_token is not None:
            self._load_token.cancel()

    def search(self, term: str) -> None:
        """Change the search term; always goes back to page 1."""
        self.search_term = term or ""
        self.paginator.set_items(self.filtered_items)
        self.paginator.reset_to_first_page()

    def _parse_items(self, data: Any) -> List[T]:
        if not isinstance(data, list):
            logger.warning(f"Expected a list of {self.plural}, got {type(data).__name__}")
            return []
        items = []
        for raw in data:
            try:
                items.append(self.item_class.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed {self.singular}: {e.error_count()} error(s)")
        return items

    # === Card actions ===

    def view(self, item: T) -> None:
        self.selected = item
        self.editing = None
        self.dialog_open = True

    def edit(self, item: T) -> None:
        self.editing = item
        self.selected = None
        self.dialog_open = True

    def add_new(self) -> None:
        self.editing = None
        self.selected = None
        self.dialog_open = True

    def close_dialog(self) -> None:
        self.dialog_open = False
        self.selected = None
        self.editing = None

    async def save(self, payload: Dict[str, Any]) -> Optional[T]:
        """
        Create (add_new) or update (edit) from dialog data, then reload.
        """
        try:
            if self.editing is not None:
                saved = await self.api.put(f"{self.endpoint}/{self.editing.id}", payload)
            else:
                saved = await self.api.post(self.endpoint, payload)
        except ApiError as e:
            logger.error(f"Could not save {self.singular}: {e.message}")
            self.notifier.notify("Error", f"Could not save the {self.singular}.", variant="destructive")
            return None

        self.close_dialog()
        try:
            item = self.item_class.model_validate(saved)
        except PydanticValidationError as e:
            # Saved on the server; only the echoed record is unreadable
            logger.warning(f"Unexpected {self.singular} in save response: {e.error_count()} error(s)")
            item = None

        await self.load()
        if item is None:
            self.notifier.notify(
                f"{self.singular.capitalize()} saved",
                f"The {self.singular} was saved but could not be read back.",
            )
        else:
            self.notifier.notify(f"{self.singular.capitalize()} saved", item.name)
        return item

    async def delete(self, item_id: int) -> bool:
        """
        Delete after explicit confirmation; success reloads the list.

        Returns:
            True if the item was deleted
        """
        answer = self.confirm(self.delete_prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        try:
            await self.api.delete(f"{self.endpoint}/{item_id}")
        except ApiError as e:
            logger.error(f"Could not delete {self.singular} {item_id}: {e.message}")
            self.notifier.notify("Error", f"Could not delete the {self.singular}.", variant="destructive")
            return False

        await self.load()
        self.notifier.notify(
            f"{self.singular.capitalize()} deleted",
            f"The {self.singular} was removed successfully.",
        )
        return True


class ExercisesPage(ListPage[Exercise]):
    endpoint = "exercises"
    item_class = Exercise
    singular = "exercise"
    plural = "exercises"

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None, confirm: Optional[ConfirmCallback] = None):
        super().__init__(api, notifier, confirm, page_size=settings.exercises_per_page)


class MethodsPage(ListPage[Method]):
    endpoint = "methods"
    item_class = Method
    singular = "method"
    plural = "methods"

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None, confirm: Optional[ConfirmCallback] = None):
        super().__init__(api, notifier, confirm, page_size=settings.methods_per_page)
