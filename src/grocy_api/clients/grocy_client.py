"""Client for the Grocy REST API."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import requests

from grocy_api.clients.dispatch import (
    API_KEY_HEADER,
    BODY_METHODS,
    TRANSPORT_ERRORS,
    build_query_pairs,
    encode_segment,
    normalize_base_url,
    request_failure,
)
from grocy_api.clients.errors import (
    GrocyHTTPError,
    GrocyValidationError,
    MissingAPIKeyError,
)
from grocy_api.clients.http_session import configure_session
from grocy_api.clients.responses import (
    error_message_from_payload,
    is_success,
    normalize_response,
)
from grocy_api.models import payloads as schemas
from grocy_api.models.outcomes import EmptySuccess, Outcome
from grocy_api.utils.logging_utils import get_tagged_logger, setup_logging
from grocy_api.utils.validators import (
    validate_id,
    validate_number,
    validate_optional_string,
    validate_string,
)

logger = get_tagged_logger(__name__, tag="grocy_client")

DEFAULT_USER_AGENT = "grocy-api-client"

QueryValue = Union[str, int, float, bool, Sequence[Union[str, int, float, bool]], None]


@dataclass
class GrocyClientConfig:
    """
    Configuration for GrocyClient.

    Attributes
    ----------
    base_url:
        URL of the Grocy instance, with or without the trailing ``/api``.
    api_key:
        API key sent in the ``GROCY-API-KEY`` header. Can be set later with
        ``GrocyClient.set_api_key``.
    user_agent:
        User-Agent header sent with every request.
    timeout_seconds:
        Optional default timeout applied to every request. ``None`` keeps the
        transport default.
    """

    base_url: str
    api_key: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: Optional[float] = None


def _validate_api_key(api_key: Any) -> Optional[str]:
    # API keys must reach Grocy byte for byte
    validated = validate_optional_string(api_key, "API key", min_length=1, sanitize=False)
    return validated.strip() if validated else None


def _entity_name(entity: Any) -> str:
    return validate_string(entity, "Entity name", min_length=1, max_length=50, sanitize=False)


def _setting_key(setting_key: Any) -> str:
    return validate_string(
        setting_key, "Setting key", min_length=1, max_length=100, sanitize=False
    )


def _barcode(barcode: Any) -> str:
    return validate_string(barcode, "Barcode", min_length=1, max_length=200, sanitize=False)


def _file_group(group: Any) -> str:
    return validate_string(group, "File group", min_length=1, max_length=100, sanitize=False)


def _file_name(file_name: Any) -> str:
    return validate_string(
        file_name, "File name", min_length=1, max_length=255, sanitize=False
    )


def _userfield_object_id(object_id: Any) -> Union[int, str]:
    """Userfield object ids are numeric ids or free-form keys."""
    if isinstance(object_id, (int, float)):
        return validate_id(object_id, "Object ID")
    # Keys are matched exactly server-side
    return validate_string(
        object_id, "Object ID", min_length=1, max_length=100, sanitize=False
    )


def _list_params(
    query: Optional[Union[str, Sequence[str]]],
    order: Optional[str],
    limit: Optional[int],
    offset: Optional[int],
) -> Dict[str, QueryValue]:
    """Build the filter/sort/paging parameters shared by list endpoints."""
    params: Dict[str, QueryValue] = {}
    if query:
        params["query"] = list(query) if isinstance(query, (list, tuple)) else query
    if order:
        params["order"] = order
    if limit is not None:
        params["limit"] = validate_number(limit, "Limit")
    if offset is not None:
        params["offset"] = validate_number(offset, "Offset")
    return params


def _copy_mapping(data: Any, label: str) -> Dict[str, Any]:
    """Bodies Grocy validates itself are only checked for shape."""
    return schemas.build_payload(data, (), label=label)


class GrocyClient:
    """
    Thin, validating wrapper around the Grocy REST API.

    Every public operation validates its arguments, then goes through
    ``request`` which issues exactly one HTTP call and normalizes the reply:

    - JSON bodies are returned as parsed Python values;
    - 204 responses return ``EmptySuccess``;
    - iCal responses return ``CalendarText``;
    - other successful responses (file downloads) return ``OpaqueSuccess``
      holding the raw ``requests.Response``.

    Any failure after validation surfaces as ``GrocyAPIError``.

    Notes
    -----
    The client keeps no per-call state, so one instance can be shared across
    threads as long as the underlying session can. ``set_api_key`` is not
    synchronized with in-flight calls: a call that already read the old key
    keeps using it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        # The base URL is configuration, not user content: never escaped
        validated_base_url = validate_string(base_url, "Base URL", min_length=1, sanitize=False)
        validated_api_key = _validate_api_key(api_key)

        self.base_url = normalize_base_url(validated_base_url)
        self._api_key = validated_api_key
        self._session = configure_session(
            session or requests.Session(),
            headers={"User-Agent": user_agent},
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_config(
        cls,
        config: GrocyClientConfig,
        session: Optional[requests.Session] = None,
    ) -> "GrocyClient":
        return cls(
            config.base_url,
            config.api_key,
            session=session,
            user_agent=config.user_agent,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def set_api_key(self, api_key: Optional[str]) -> None:
        """Set, replace or (with ``None``/``""``) clear the API key."""
        self._api_key = _validate_api_key(api_key)

    # ------------------------------------------------------------------ #
    # Dispatcher                                                         #
    # ------------------------------------------------------------------ #

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
        query_params: Optional[Mapping[str, QueryValue]] = None,
    ) -> Outcome:
        """
        Send one request to ``<base_url><path>`` and normalize the response.

        Parameters
        ----------
        path:
            Endpoint path starting with ``/``, e.g. ``/stock``.
        method:
            HTTP method.
        body:
            JSON body. Only sent with POST and PUT.
        query_params:
            Query parameters. Lists expand to repeated ``name[]`` pairs and
            ``None`` values are left out.

        Raises
        ------
        MissingAPIKeyError
            No API key is set. Raised before anything else happens.
        GrocyAPIError
            Network failure, unreadable body or non-2xx status.
        """
        api_key = self._api_key
        if not api_key:
            raise MissingAPIKeyError()

        verb = method.upper()
        url = f"{self.base_url}{path}"
        params = build_query_pairs(query_params)

        kwargs: Dict[str, Any] = {
            "headers": {API_KEY_HEADER: api_key},
            "params": params,
        }
        if body is not None and verb in BODY_METHODS:
            kwargs["json"] = body

        logger.debug(f"Grocy {verb} {url} params={params}")
        try:
            response = self._session.request(verb, url, **kwargs)
            return normalize_response(response)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"Grocy {verb} {url} failed: {exc}")
            raise request_failure(exc) from exc

    # ------------------------------------------------------------------ #
    # System                                                             #
    # ------------------------------------------------------------------ #

    def get_system_info(self) -> Outcome:
        """Installed Grocy version and runtime information."""
        return self.request("/system/info")

    def get_db_changed_time(self) -> Outcome:
        return self.request("/system/db-changed-time")

    def get_config(self) -> Outcome:
        return self.request("/system/config")

    def get_time(self, offset: Optional[int] = None) -> Outcome:
        """Current server time, optionally shifted by ``offset`` seconds."""
        params = {"offset": offset} if offset is not None else {}
        return self.request("/system/time", "GET", None, params)

    # ------------------------------------------------------------------ #
    # Stock                                                              #
    # ------------------------------------------------------------------ #

    def get_stock(self) -> Outcome:
        """All products currently in stock."""
        return self.request("/stock")

    def get_stock_entry(self, entry_id: int) -> Outcome:
        valid_entry_id = validate_id(entry_id, "Entry ID")
        return self.request(f"/stock/entry/{valid_entry_id}")

    def edit_stock_entry(self, entry_id: int, data: Mapping[str, Any]) -> Outcome:
        """
        Edit a stock entry.

        Only the keys present in ``data`` are validated and sent; unknown keys
        are forwarded as-is.
        """
        valid_entry_id = validate_id(entry_id, "Entry ID")
        payload = schemas.build_payload(
            data, schemas.STOCK_ENTRY_EDIT_FIELDS, label="Stock entry data"
        )
        return self.request(f"/stock/entry/{valid_entry_id}", "PUT", payload)

    def get_volatile_stock(self, due_soon_days: int = 5) -> Outcome:
        """Products that are due soon, overdue, expired or missing."""
        days = validate_number(due_soon_days, "Due soon days", min_value=0, max_value=365)
        return self.request("/stock/volatile", "GET", None, {"due_soon_days": days})

    def get_product_details(self, product_id: int) -> Outcome:
        valid_product_id = validate_id(product_id, "Product ID")
        return self.request(f"/stock/products/{valid_product_id}")

    def get_product_by_barcode(self, barcode: str) -> Outcome:
        valid_barcode = _barcode(barcode)
        return self.request(f"/stock/products/by-barcode/{encode_segment(valid_barcode)}")

    def add_product_to_stock(self, product_id: int, data: Mapping[str, Any]) -> Outcome:
        """
        Add an amount of a product to stock.

        ``data`` must contain ``amount``; ``price``, ``best_before_date``,
        ``location_id``, ``shopping_location_id`` and ``transaction_type`` are
        optional. Returns the resulting stock log entries.
        """
        valid_product_id = validate_id(product_id, "Product ID")
        payload = schemas.build_payload(data, schemas.STOCK_ADD_FIELDS, label="Stock data")
        return self.request(f"/stock/products/{valid_product_id}/add", "POST", payload)

    def add_product_to_stock_by_barcode(
        self, barcode: str, data: Mapping[str, Any]
    ) -> Outcome:
        valid_barcode = _barcode(barcode)
        payload = schemas.build_payload(data, schemas.STOCK_ADD_FIELDS, label="Stock data")
        return self.request(
            f"/stock/products/by-barcode/{encode_segment(valid_barcode)}/add", "POST", payload
        )

    def consume_product(self, product_id: int, data: Mapping[str, Any]) -> Outcome:
        """Remove an amount of a product from stock."""
        valid_product_id = validate_id(product_id, "Product ID")
        payload = schemas.build_payload(
            data, schemas.STOCK_CONSUME_FIELDS, label="Consumption data"
        )
        return self.request(f"/stock/products/{valid_product_id}/consume", "POST", payload)

    def consume_product_by_barcode(self, barcode: str, data: Mapping[str, Any]) -> Outcome:
        valid_barcode = _barcode(barcode)
        payload = schemas.build_payload(
            data, schemas.STOCK_CONSUME_FIELDS, label="Consumption data"
        )
        return self.request(
            f"/stock/products/by-barcode/{encode_segment(valid_barcode)}/consume",
            "POST",
            payload,
        )

    def transfer_product(self, product_id: int, data: Mapping[str, Any]) -> Outcome:
        """Move an amount of a product between two locations."""
        valid_product_id = validate_id(product_id, "Product ID")
        payload = schemas.build_payload(
            data, schemas.STOCK_TRANSFER_FIELDS, label="Transfer data"
        )
        return self.request(f"/stock/products/{valid_product_id}/transfer", "POST", payload)

    def inventory_product(self, product_id: int, data: Mapping[str, Any]) -> Outcome:
        """Set the absolute stock amount of a product."""
        valid_product_id = validate_id(product_id, "Product ID")
        payload = schemas.build_payload(
            data, schemas.STOCK_INVENTORY_FIELDS, label="Inventory data"
        )
        return self.request(f"/stock/products/{valid_product_id}/inventory", "POST", payload)

    def open_product(self, product_id: int, data: Mapping[str, Any]) -> Outcome:
        valid_product_id = validate_id(product_id, "Product ID")
        payload = schemas.build_payload(data, schemas.STOCK_OPEN_FIELDS, label="Open data")
        return self.request(f"/stock/products/{valid_product_id}/open", "POST", payload)

    # ------------------------------------------------------------------ #
    # Shopping list                                                      #
    # ------------------------------------------------------------------ #

    def add_missing_products_to_shopping_list(
        self, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        return self.request(
            "/stock/shoppinglist/add-missing-products",
            "POST",
            _copy_mapping(data, "Shopping list data"),
        )

    def add_overdue_products_to_shopping_list(
        self, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        return self.request(
            "/stock/shoppinglist/add-overdue-products",
            "POST",
            _copy_mapping(data, "Shopping list data"),
        )

    def add_expired_products_to_shopping_list(
        self, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        return self.request(
            "/stock/shoppinglist/add-expired-products",
            "POST",
            _copy_mapping(data, "Shopping list data"),
        )

    def clear_shopping_list(self, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD) -> Outcome:
        """Remove all items from a shopping list (``list_id`` defaults to 1 server-side)."""
        return self.request(
            "/stock/shoppinglist/clear", "POST", _copy_mapping(data, "Shopping list data")
        )

    def add_product_to_shopping_list(self, data: Mapping[str, Any]) -> Outcome:
        payload = schemas.build_payload(
            data, schemas.SHOPPING_LIST_ADD_FIELDS, label="Shopping list item data"
        )
        return self.request("/stock/shoppinglist/add-product", "POST", payload)

    def remove_product_from_shopping_list(self, data: Mapping[str, Any]) -> Outcome:
        payload = schemas.build_payload(
            data, schemas.SHOPPING_LIST_REMOVE_FIELDS, label="Shopping list item data"
        )
        return self.request("/stock/shoppinglist/remove-product", "POST", payload)

    # ------------------------------------------------------------------ #
    # Generic entities                                                   #
    # ------------------------------------------------------------------ #

    def get_objects(
        self,
        entity: str,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        """
        List all objects of ``entity`` (``products``, ``locations``, ...).

        ``query`` takes Grocy filter expressions such as ``"name=Milk"``; pass
        a list to combine several conditions.
        """
        valid_entity = _entity_name(entity)
        params = _list_params(query, order, limit, offset)
        return self.request(f"/objects/{encode_segment(valid_entity)}", "GET", None, params)

    def add_object(self, entity: str, data: Mapping[str, Any]) -> Outcome:
        valid_entity = _entity_name(entity)
        payload = _copy_mapping(data, "Entity data")
        return self.request(f"/objects/{encode_segment(valid_entity)}", "POST", payload)

    def get_object(self, entity: str, object_id: int) -> Outcome:
        valid_entity = _entity_name(entity)
        valid_object_id = validate_id(object_id, "Object ID")
        return self.request(f"/objects/{encode_segment(valid_entity)}/{valid_object_id}")

    def edit_object(self, entity: str, object_id: int, data: Mapping[str, Any]) -> Outcome:
        valid_entity = _entity_name(entity)
        valid_object_id = validate_id(object_id, "Object ID")
        payload = _copy_mapping(data, "Entity data")
        return self.request(
            f"/objects/{encode_segment(valid_entity)}/{valid_object_id}", "PUT", payload
        )

    def delete_object(self, entity: str, object_id: int) -> Outcome:
        valid_entity = _entity_name(entity)
        valid_object_id = validate_id(object_id, "Object ID")
        return self.request(
            f"/objects/{encode_segment(valid_entity)}/{valid_object_id}", "DELETE"
        )

    # ------------------------------------------------------------------ #
    # Userfields                                                         #
    # ------------------------------------------------------------------ #

    def get_userfields(self, entity: str, object_id: Union[int, str]) -> Outcome:
        valid_entity = _entity_name(entity)
        valid_object_id = _userfield_object_id(object_id)
        return self.request(
            f"/userfields/{encode_segment(valid_entity)}/{encode_segment(valid_object_id)}"
        )

    def set_userfields(
        self, entity: str, object_id: Union[int, str], data: Mapping[str, Any]
    ) -> Outcome:
        valid_entity = _entity_name(entity)
        valid_object_id = _userfield_object_id(object_id)
        payload = _copy_mapping(data, "Userfields data")
        return self.request(
            f"/userfields/{encode_segment(valid_entity)}/{encode_segment(valid_object_id)}",
            "PUT",
            payload,
        )

    # ------------------------------------------------------------------ #
    # Files                                                              #
    # ------------------------------------------------------------------ #

    def get_file(self, group: str, file_name: str, **options: Any) -> Outcome:
        """
        Download a file. ``file_name`` is the BASE64 encoded name Grocy expects.

        Keyword options (``force_serve_as``, ``best_fit_width``, ...) become
        query parameters. The result is usually an ``OpaqueSuccess`` whose
        ``response`` holds the bytes.
        """
        valid_group = _file_group(group)
        valid_name = _file_name(file_name)
        params = schemas.build_payload(
            options, schemas.FILE_OPTIONS_FIELDS, label="File options"
        )
        return self.request(
            f"/files/{encode_segment(valid_group)}/{encode_segment(valid_name)}",
            "GET",
            None,
            params,
        )

    def upload_file(self, group: str, file_name: str, file_data: Any) -> Outcome:
        """
        Upload raw bytes (or a file object) to ``/files/<group>/<file_name>``.

        This bypasses ``request``: the body is sent as-is, and Grocy only ever
        answers with an empty success or a JSON error.
        """
        valid_group = _file_group(group)
        valid_name = _file_name(file_name)
        if not file_data:
            raise GrocyValidationError("File data", "File data is required")

        api_key = self._api_key
        if not api_key:
            raise MissingAPIKeyError()

        url = f"{self.base_url}/files/{encode_segment(valid_group)}/{encode_segment(valid_name)}"
        logger.debug(f"Grocy PUT {url} (file upload)")
        try:
            response = self._session.request(
                "PUT",
                url,
                headers={API_KEY_HEADER: api_key},
                data=file_data,
            )
            if not is_success(response.status_code):
                raise GrocyHTTPError(response.status_code, self._upload_error_message(response))
        except TRANSPORT_ERRORS as exc:
            logger.error(f"Grocy file upload to {url} failed: {exc}")
            raise request_failure(exc) from exc

        return EmptySuccess()

    @staticmethod
    def _upload_error_message(response: Any) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return error_message_from_payload(payload, response.status_code)

    def delete_file(self, group: str, file_name: str) -> Outcome:
        valid_group = _file_group(group)
        valid_name = _file_name(file_name)
        return self.request(
            f"/files/{encode_segment(valid_group)}/{encode_segment(valid_name)}", "DELETE"
        )

    # ------------------------------------------------------------------ #
    # Users                                                              #
    # ------------------------------------------------------------------ #

    def get_users(
        self,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        params = _list_params(query, order, limit, offset)
        return self.request("/users", "GET", None, params)

    def create_user(self, data: Mapping[str, Any]) -> Outcome:
        """Create a user. ``username`` and ``password`` are required."""
        payload = schemas.build_payload(data, schemas.USER_CREATE_FIELDS, label="User data")
        return self.request("/users", "POST", payload)

    def edit_user(self, user_id: int, data: Mapping[str, Any]) -> Outcome:
        valid_user_id = validate_id(user_id, "User ID")
        payload = schemas.build_payload(data, schemas.USER_EDIT_FIELDS, label="User data")
        return self.request(f"/users/{valid_user_id}", "PUT", payload)

    def delete_user(self, user_id: int) -> Outcome:
        valid_user_id = validate_id(user_id, "User ID")
        return self.request(f"/users/{valid_user_id}", "DELETE")

    # ------------------------------------------------------------------ #
    # Current user                                                       #
    # ------------------------------------------------------------------ #

    def get_current_user(self) -> Outcome:
        return self.request("/user")

    def get_user_settings(self) -> Outcome:
        return self.request("/user/settings")

    def get_user_setting(self, setting_key: str) -> Outcome:
        valid_key = _setting_key(setting_key)
        return self.request(f"/user/settings/{encode_segment(valid_key)}")

    def set_user_setting(self, setting_key: str, data: Mapping[str, Any]) -> Outcome:
        """Store a user setting; ``data`` is usually ``{"value": ...}``."""
        valid_key = _setting_key(setting_key)
        payload = _copy_mapping(data, "Setting data")
        return self.request(f"/user/settings/{encode_segment(valid_key)}", "PUT", payload)

    # ------------------------------------------------------------------ #
    # Recipes                                                            #
    # ------------------------------------------------------------------ #

    def add_recipe_products_to_shopping_list(
        self, recipe_id: int, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        """Put the not-fulfilled ingredients of a recipe on the shopping list."""
        valid_recipe_id = validate_id(recipe_id, "Recipe ID")
        payload = schemas.build_payload(
            data, schemas.RECIPE_SHOPPING_LIST_FIELDS, label="Recipe data"
        )
        return self.request(
            f"/recipes/{valid_recipe_id}/add-not-fulfilled-products-to-shoppinglist",
            "POST",
            payload,
        )

    def get_recipe_fulfillment(self, recipe_id: int) -> Outcome:
        valid_recipe_id = validate_id(recipe_id, "Recipe ID")
        return self.request(f"/recipes/{valid_recipe_id}/fulfillment")

    def consume_recipe(self, recipe_id: int) -> Outcome:
        valid_recipe_id = validate_id(recipe_id, "Recipe ID")
        return self.request(f"/recipes/{valid_recipe_id}/consume", "POST")

    def get_all_recipes_fulfillment(
        self,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        params = _list_params(query, order, limit, offset)
        return self.request("/recipes/fulfillment", "GET", None, params)

    # ------------------------------------------------------------------ #
    # Chores                                                             #
    # ------------------------------------------------------------------ #

    def get_chores(
        self,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        params = _list_params(query, order, limit, offset)
        return self.request("/chores", "GET", None, params)

    def get_chore_details(self, chore_id: int) -> Outcome:
        valid_chore_id = validate_id(chore_id, "Chore ID")
        return self.request(f"/chores/{valid_chore_id}")

    def execute_chore(
        self, chore_id: int, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        """Track an execution of a chore (``tracked_time``, ``done_by``)."""
        valid_chore_id = validate_id(chore_id, "Chore ID")
        payload = schemas.build_payload(
            data, schemas.CHORE_EXECUTE_FIELDS, label="Chore execution data"
        )
        return self.request(f"/chores/{valid_chore_id}/execute", "POST", payload)

    # ------------------------------------------------------------------ #
    # Batteries                                                          #
    # ------------------------------------------------------------------ #

    def get_batteries(
        self,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        params = _list_params(query, order, limit, offset)
        return self.request("/batteries", "GET", None, params)

    def get_battery_details(self, battery_id: int) -> Outcome:
        valid_battery_id = validate_id(battery_id, "Battery ID")
        return self.request(f"/batteries/{valid_battery_id}")

    def charge_battery(
        self, battery_id: int, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        valid_battery_id = validate_id(battery_id, "Battery ID")
        payload = schemas.build_payload(
            data, schemas.BATTERY_CHARGE_FIELDS, label="Battery charge data"
        )
        return self.request(f"/batteries/{valid_battery_id}/charge", "POST", payload)

    # ------------------------------------------------------------------ #
    # Tasks                                                              #
    # ------------------------------------------------------------------ #

    def get_tasks(
        self,
        *,
        query: Optional[Union[str, Sequence[str]]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Outcome:
        params = _list_params(query, order, limit, offset)
        return self.request("/tasks", "GET", None, params)

    def complete_task(
        self, task_id: int, data: Mapping[str, Any] = schemas.EMPTY_PAYLOAD
    ) -> Outcome:
        valid_task_id = validate_id(task_id, "Task ID")
        payload = schemas.build_payload(
            data, schemas.TASK_COMPLETE_FIELDS, label="Task completion data"
        )
        return self.request(f"/tasks/{valid_task_id}/complete", "POST", payload)

    def undo_task(self, task_id: int) -> Outcome:
        valid_task_id = validate_id(task_id, "Task ID")
        return self.request(f"/tasks/{valid_task_id}/undo", "POST")

    # ------------------------------------------------------------------ #
    # Calendar                                                           #
    # ------------------------------------------------------------------ #

    def get_calendar(self) -> Outcome:
        """iCal export of all planned events, returned as ``CalendarText``."""
        return self.request("/calendar/ical")

    def get_calendar_sharing_link(self) -> Outcome:
        return self.request("/calendar/ical/sharing-link")


def make_grocy_client_from_env(
    session: Optional[requests.Session] = None,
) -> GrocyClient:
    """
    Convenient factory to construct a GrocyClient using environment variables.

    Expected environment variables
    ------------------------------
    GROCY_BASE_URL:
        URL of the Grocy instance. **Required**.
    GROCY_API_KEY:
        API key. Optional here, but every request needs one.
    GROCY_USER_AGENT:
        Optional User-Agent override.
    GROCY_TIMEOUT_SECONDS:
        Optional default request timeout.
    """
    timeout = os.getenv("GROCY_TIMEOUT_SECONDS")
    config = GrocyClientConfig(
        base_url=os.getenv("GROCY_BASE_URL", ""),
        api_key=os.getenv("GROCY_API_KEY"),
        user_agent=os.getenv("GROCY_USER_AGENT", DEFAULT_USER_AGENT),
        timeout_seconds=float(timeout) if timeout else None,
    )
    return GrocyClient.from_config(config, session=session)


def main() -> None:
    """Manual test helper to print the system info of a Grocy instance."""
    setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
    client = make_grocy_client_from_env()
    info = client.get_system_info()
    logger.info(f"System info: {info!r}")

    volatile = client.get_volatile_stock()
    if isinstance(volatile, dict):
        logger.info(f"{len(volatile.get('due_products') or [])} products due soon")


if __name__ == "__main__":
    main()
