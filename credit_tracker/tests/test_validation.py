from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from credit_tracker.app.exceptions import ValidationError
from credit_tracker.app.validation import (
    DATE_ORDER_MESSAGE,
    NULL_MESSAGE,
    ROOT_FIELD,
    EntityKind,
    check_week_dates,
    validate,
)


def _payment_payload(**overrides) -> dict:
    payload = {
        "week_id": str(uuid4()),
        "provider_id": str(uuid4()),
        "amount": "150.00",
        "payment_date": "2025-01-03",
    }
    payload.update(overrides)
    return payload


def test_payment_amount_zero_is_rejected():
    result = validate(EntityKind.PAYMENT, _payment_payload(amount="0"))

    assert not result.ok
    assert "amount" in result.error_map()


def test_payment_amount_above_limit_is_rejected():
    result = validate(EntityKind.PAYMENT, _payment_payload(amount="1000000.00"))

    assert not result.ok
    assert list(result.error_map()) == ["amount"]


def test_payment_amount_at_limit_is_accepted():
    result = validate(EntityKind.PAYMENT, _payment_payload(amount="999999.99"))

    assert result.ok
    assert str(result.data["amount"]) == "999999.99"


def test_payment_amount_with_three_decimals_is_rejected():
    result = validate(EntityKind.PAYMENT, _payment_payload(amount="10.005"))

    assert "amount" in result.error_map()


def test_every_failing_field_is_reported_at_once():
    result = validate(
        EntityKind.PAYMENT,
        {
            "week_id": "not-a-uuid",
            "amount": "-5",
            "payment_date": "yesterday",
            "description": "x" * 201,
        },
    )

    errors = result.error_map()
    assert set(errors) == {"week_id", "provider_id", "amount", "payment_date", "description"}


def test_month_year_and_name_bounds():
    result = validate(EntityKind.MONTH, {"name": "", "year": 2031})

    assert set(result.error_map()) == {"name", "year"}
    assert validate(EntityKind.MONTH, {"name": "Marzo", "year": 2020}).ok


def test_month_name_is_trimmed():
    result = validate(EntityKind.MONTH, {"name": "  Abril  ", "year": 2024})

    assert result.data["name"] == "Abril"


def test_week_end_before_start_is_reported_on_end_date():
    result = validate(
        EntityKind.WEEK,
        {
            "month_id": str(uuid4()),
            "start_date": "2025-01-08",
            "end_date": "2025-01-01",
        },
    )

    assert result.error_map() == {"end_date": [DATE_ORDER_MESSAGE]}


def test_week_date_error_is_combined_with_field_errors():
    result = validate(
        EntityKind.WEEK,
        {
            "month_id": str(uuid4()),
            "start_date": "2025-01-08",
            "end_date": "2025-01-01",
            "credit_amount": "-1",
        },
    )

    errors = result.error_map()
    assert DATE_ORDER_MESSAGE in errors["end_date"]
    assert "credit_amount" in errors


def test_single_day_week_is_valid():
    result = validate(
        EntityKind.WEEK,
        {"month_id": str(uuid4()), "start_date": "2025-02-01", "end_date": "2025-02-01"},
    )

    assert result.ok
    assert result.data["week_number"] is None


def test_partial_update_keeps_only_given_fields():
    result = validate(EntityKind.PROVIDER, {"is_active": False}, partial=True)

    assert result.ok
    assert result.data == {"is_active": False}


def test_partial_update_rejects_null_for_required_fields():
    result = validate(EntityKind.MONTH, {"name": None}, partial=True)

    assert result.error_map() == {"name": [NULL_MESSAGE]}


def test_partial_update_allows_clearing_optional_text():
    result = validate(EntityKind.PAYMENT, {"description": None}, partial=True)

    assert result.ok
    assert result.data == {"description": None}


def test_non_object_payload_is_a_root_error():
    result = validate(EntityKind.PROVIDER, ["not", "a", "mapping"])

    assert result.error_map() == {ROOT_FIELD: ["Expected an object"]}


def test_unwrap_raises_with_field_messages():
    result = validate(EntityKind.PROVIDER, {"name": ""})

    with pytest.raises(ValidationError) as excinfo:
        result.unwrap()

    assert "name" in excinfo.value.errors


def test_uuid_identifiers_are_normalized():
    raw = str(uuid4()).upper()

    result = validate(EntityKind.PAYMENT, _payment_payload(week_id=raw))

    assert result.data["week_id"] == raw.lower()


def test_check_week_dates():
    check_week_dates(date(2025, 1, 1), date(2025, 1, 1))

    with pytest.raises(ValidationError) as excinfo:
        check_week_dates(date(2025, 1, 2), date(2025, 1, 1))

    assert excinfo.value.errors == {"end_date": [DATE_ORDER_MESSAGE]}
