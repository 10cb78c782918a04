"""Known-field schemas for structured Grocy request bodies.

Only the fields listed in a schema are validated. Any other key supplied by
the caller is forwarded to Grocy untouched, so newer server fields keep
working without a client release.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Tuple

from grocy_api.utils.validators import (
    FieldKind,
    require_mapping,
    validate_field,
    validate_id,
)

# Read-only default for operations whose body is optional
EMPTY_PAYLOAD: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class PayloadField:
    """
    One known field of a request body.

    Attributes
    ----------
    name:
        Key in the JSON body.
    label:
        Human-readable name used in validation messages.
    kind:
        Which validator applies.
    options:
        Extra keyword arguments for the validator (bounds, sanitize flag, ...).
    omit_when_missing:
        Leave the key out of the body when the caller did not supply it,
        instead of validating it as ``None``.
    omit_when_empty:
        Also leave the key out when the supplied value is empty (``None``,
        ``""``, ``[]``, ...).
    """

    name: str
    label: str
    kind: FieldKind
    options: Mapping[str, Any] = field(default_factory=dict)
    omit_when_missing: bool = False
    omit_when_empty: bool = False


def build_payload(
    data: Any,
    fields: Sequence[PayloadField],
    *,
    label: str,
) -> Dict[str, Any]:
    """Validate the known ``fields`` of ``data`` and pass every other key through."""
    source = require_mapping(data, label)
    known = {f.name for f in fields}

    payload: Dict[str, Any] = {}
    for spec in fields:
        if spec.omit_when_missing and spec.name not in source:
            continue
        if spec.omit_when_empty and not source.get(spec.name):
            continue
        payload[spec.name] = validate_field(
            spec.kind, source.get(spec.name), spec.label, spec.options
        )

    for key, value in source.items():
        if key not in known:
            payload[key] = value

    return payload


# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------

_TRANSACTION_TYPE = PayloadField(
    "transaction_type",
    "Transaction type",
    FieldKind.OPTIONAL_STRING,
    {"max_length": 50},
)

STOCK_ADD_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("amount", "Amount", FieldKind.NUMBER, {"min_value": 0.001}),
    PayloadField("price", "Price", FieldKind.OPTIONAL_NUMBER, {"min_value": 0}),
    PayloadField("best_before_date", "Best before date", FieldKind.OPTIONAL_DATE),
    PayloadField("location_id", "Location ID", FieldKind.OPTIONAL_ID),
    PayloadField("shopping_location_id", "Shopping location ID", FieldKind.OPTIONAL_ID),
    _TRANSACTION_TYPE,
)

STOCK_CONSUME_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("amount", "Amount", FieldKind.NUMBER, {"min_value": 0.001}),
    _TRANSACTION_TYPE,
    PayloadField("spoiled", "Spoiled", FieldKind.BOOLEAN, omit_when_missing=True),
    PayloadField("location_id", "Location ID", FieldKind.OPTIONAL_ID),
    PayloadField("recipe_id", "Recipe ID", FieldKind.OPTIONAL_ID),
    PayloadField("exact_amount", "Exact amount", FieldKind.BOOLEAN, omit_when_missing=True),
)

STOCK_TRANSFER_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("amount", "Amount", FieldKind.NUMBER, {"min_value": 0.001}),
    PayloadField("location_id_from", "Source location ID", FieldKind.ID),
    PayloadField("location_id_to", "Destination location ID", FieldKind.ID),
    _TRANSACTION_TYPE,
)

STOCK_INVENTORY_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("new_amount", "New amount", FieldKind.NUMBER, {"min_value": 0}),
    PayloadField("best_before_date", "Best before date", FieldKind.OPTIONAL_DATE),
    PayloadField("location_id", "Location ID", FieldKind.OPTIONAL_ID),
    PayloadField("price", "Price", FieldKind.OPTIONAL_NUMBER, {"min_value": 0}),
    PayloadField("shopping_location_id", "Shopping location ID", FieldKind.OPTIONAL_ID),
)

STOCK_OPEN_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("amount", "Amount", FieldKind.OPTIONAL_NUMBER, {"min_value": 0.001}),
    PayloadField("location_id", "Location ID", FieldKind.OPTIONAL_ID),
    PayloadField(
        "allow_subproduct_substitution",
        "Allow subproduct substitution",
        FieldKind.BOOLEAN,
        omit_when_missing=True,
    ),
)

# Every field is optional on edit: only what the caller sends is touched.
STOCK_ENTRY_EDIT_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("amount", "Amount", FieldKind.NUMBER, {"min_value": 0}, omit_when_missing=True),
    PayloadField(
        "best_before_date", "Best before date", FieldKind.OPTIONAL_DATE, omit_when_missing=True
    ),
    PayloadField(
        "price", "Price", FieldKind.OPTIONAL_NUMBER, {"min_value": 0}, omit_when_missing=True
    ),
    PayloadField("open", "Open", FieldKind.BOOLEAN, omit_when_missing=True),
    PayloadField("opened_date", "Opened date", FieldKind.OPTIONAL_DATE, omit_when_missing=True),
    PayloadField("location_id", "Location ID", FieldKind.OPTIONAL_ID, omit_when_missing=True),
    PayloadField(
        "shopping_location_id",
        "Shopping location ID",
        FieldKind.OPTIONAL_ID,
        omit_when_missing=True,
    ),
)

# ---------------------------------------------------------------------------
# Shopping list
# ---------------------------------------------------------------------------

SHOPPING_LIST_ADD_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("product_id", "Product ID", FieldKind.ID),
    PayloadField("list_id", "List ID", FieldKind.OPTIONAL_ID),
    PayloadField(
        "product_amount", "Product amount", FieldKind.OPTIONAL_NUMBER, {"min_value": 0.001}
    ),
    PayloadField("note", "Note", FieldKind.OPTIONAL_STRING, {"max_length": 500}),
)

SHOPPING_LIST_REMOVE_FIELDS: Tuple[PayloadField, ...] = SHOPPING_LIST_ADD_FIELDS[:3]

# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

_USERNAME_OPTIONS = {"min_length": 1, "max_length": 50}
# Passwords are sent verbatim
_PASSWORD_OPTIONS = {"min_length": 1, "max_length": 200, "sanitize": False}
_NAME_OPTIONS = {"max_length": 100}

USER_CREATE_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("username", "Username", FieldKind.STRING, _USERNAME_OPTIONS),
    PayloadField("password", "Password", FieldKind.STRING, _PASSWORD_OPTIONS),
    PayloadField("first_name", "First name", FieldKind.OPTIONAL_STRING, _NAME_OPTIONS),
    PayloadField("last_name", "Last name", FieldKind.OPTIONAL_STRING, _NAME_OPTIONS),
)

USER_EDIT_FIELDS: Tuple[PayloadField, ...] = tuple(
    PayloadField(f.name, f.label, f.kind, f.options, omit_when_missing=True)
    for f in USER_CREATE_FIELDS
)

# ---------------------------------------------------------------------------
# Recipes, chores, batteries, tasks, files
# ---------------------------------------------------------------------------

RECIPE_SHOPPING_LIST_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField(
        "excluded_product_ids",
        "Excluded product IDs",
        FieldKind.ARRAY,
        {"item_validator": validate_id},
        omit_when_missing=True,
        omit_when_empty=True,
    ),
)

CHORE_EXECUTE_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("tracked_time", "Tracked time", FieldKind.OPTIONAL_DATE),
    PayloadField("done_by", "Done by user ID", FieldKind.OPTIONAL_ID),
)

BATTERY_CHARGE_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("tracked_time", "Tracked time", FieldKind.OPTIONAL_DATE),
)

TASK_COMPLETE_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField("done_time", "Done time", FieldKind.OPTIONAL_DATE),
)

FILE_OPTIONS_FIELDS: Tuple[PayloadField, ...] = (
    PayloadField(
        "force_serve_as",
        "Force serve as",
        FieldKind.OPTIONAL_STRING,
        {"max_length": 100, "sanitize": False},
    ),
)
