import pytest

from grocy_api.clients.errors import GrocyValidationError
from grocy_api.models import payloads as p
from grocy_api.utils.validators import FieldKind


def test_build_payload_passes_unknown_fields_through_unmodified():
    data = {"amount": 2, "custom_field": "<raw>", "nested": {"x": 1}}
    payload = p.build_payload(data, p.STOCK_ADD_FIELDS, label="Stock data")

    assert payload["amount"] == 2
    assert payload["custom_field"] == "<raw>"
    assert payload["nested"] == {"x": 1}


def test_build_payload_fills_missing_optional_fields_with_none():
    payload = p.build_payload({"amount": 1}, p.STOCK_ADD_FIELDS, label="Stock data")
    assert payload == {
        "amount": 1,
        "price": None,
        "best_before_date": None,
        "location_id": None,
        "shopping_location_id": None,
        "transaction_type": None,
    }


def test_build_payload_keeps_known_fields_before_unknown_ones():
    payload = p.build_payload(
        {"extra": True, "amount": 1}, p.STOCK_TRANSFER_FIELDS[:1], label="Transfer data"
    )
    assert list(payload) == ["amount", "extra"]


def test_omit_when_missing_fields_are_left_out():
    payload = p.build_payload({"price": 1.5}, p.STOCK_ENTRY_EDIT_FIELDS, label="Stock entry data")
    assert payload == {"price": 1.5}


def test_omit_when_missing_fields_are_still_validated_when_present():
    with pytest.raises(GrocyValidationError, match="^Open must be a boolean$"):
        p.build_payload({"open": "yes"}, p.STOCK_ENTRY_EDIT_FIELDS, label="Stock entry data")


def test_build_payload_requires_a_mapping():
    with pytest.raises(GrocyValidationError, match="^Stock data must be a mapping$"):
        p.build_payload(None, p.STOCK_ADD_FIELDS, label="Stock data")
    with pytest.raises(GrocyValidationError, match="^Stock data must be a mapping$"):
        p.build_payload([("amount", 1)], p.STOCK_ADD_FIELDS, label="Stock data")


def test_required_known_field_is_enforced():
    with pytest.raises(GrocyValidationError, match="^Amount must be a valid number$"):
        p.build_payload({}, p.STOCK_ADD_FIELDS, label="Stock data")


def test_user_create_sanitizes_names_but_not_passwords():
    data = {
        "username": 'test<script>alert("xss")</script>',
        "password": "p<a>ss&word",
        "first_name": '<img src=x onerror=alert("xss")>',
    }
    payload = p.build_payload(data, p.USER_CREATE_FIELDS, label="User data")

    assert payload["username"] == "test&lt;script&gt;alert(&quot;xss&quot;)&lt;&#x2F;script&gt;"
    assert payload["password"] == "p<a>ss&word"
    assert payload["first_name"] == "&lt;img src=x onerror=alert(&quot;xss&quot;)&gt;"
    assert payload["last_name"] is None


def test_user_edit_only_touches_supplied_fields():
    payload = p.build_payload({"first_name": "Ann"}, p.USER_EDIT_FIELDS, label="User data")
    assert payload == {"first_name": "Ann"}


def test_recipe_excluded_ids_are_validated_per_item():
    payload = p.build_payload(
        {"excluded_product_ids": [1, 2]}, p.RECIPE_SHOPPING_LIST_FIELDS, label="Recipe data"
    )
    assert payload == {"excluded_product_ids": (1, 2)}

    with pytest.raises(GrocyValidationError, match=r"^Excluded product IDs\[1\] must be a positive integer$"):
        p.build_payload(
            {"excluded_product_ids": [1, "x"]},
            p.RECIPE_SHOPPING_LIST_FIELDS,
            label="Recipe data",
        )


@pytest.mark.parametrize("value", [None, [], ()])
def test_recipe_empty_excluded_ids_are_left_out(value):
    payload = p.build_payload(
        {"excluded_product_ids": value, "extra": 1},
        p.RECIPE_SHOPPING_LIST_FIELDS,
        label="Recipe data",
    )
    assert payload == {"extra": 1}


def test_custom_schema():
    fields = (p.PayloadField("note", "Note", FieldKind.OPTIONAL_STRING, {"max_length": 3}),)
    with pytest.raises(GrocyValidationError, match="Note must not exceed 3 characters"):
        p.build_payload({"note": "long"}, fields, label="Data")


def test_empty_payload_is_read_only():
    with pytest.raises(TypeError):
        p.EMPTY_PAYLOAD["x"] = 1  # type: ignore[index]
