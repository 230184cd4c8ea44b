"""Unit tests for purchy payload validation."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from purchy_backend.models.purchy.purchy_models import (
    PurchyCreateModel,
    coerce_update_fields,
    format_validation_errors,
    parse_purchy_date,
)
from conftest import purchy_payload


def _errors_for(payload):
    with pytest.raises(ValidationError) as exc:
        PurchyCreateModel.model_validate(payload)
    return {e["path"]: e["msg"] for e in format_validation_errors(exc.value, payload)}


def test_valid_payload_builds_document():
    model = PurchyCreateModel.model_validate(purchy_payload(code_no=12))
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    doc = model.to_document(now)

    assert doc["code_no"] == "12"
    assert doc["date"] == datetime(2024, 1, 1)
    assert doc["weight"] == 60.0
    assert doc["createdAt"] == doc["updatedAt"] == now


def test_unknown_fields_are_ignored():
    model = PurchyCreateModel.model_validate(purchy_payload(extra="x"))
    assert "extra" not in model.model_dump()


def test_missing_and_empty_fields_are_reported_together():
    payload = purchy_payload(farmer_name="")
    del payload["price"]
    errors = _errors_for(payload)

    assert errors["farmer_name"] == "Farmer name is required"
    assert errors["price"] == "Price is required"


def test_invalid_values_get_specific_messages():
    errors = _errors_for(purchy_payload(
        code_no="12a",
        date="2024-02-30",
        weight=-1,
        price="abc",
        transport_status="Maybe",
    ))

    assert errors == {
        "code_no": "Code number must be numeric",
        "date": "Date must be in YYYY-MM-DD format",
        "weight": "Weight must be a positive number",
        "price": "Price must be a positive number",
        "transport_status": "Transport status must be either Paid or Unpaid",
    }


def test_error_objects_carry_location_and_value():
    payload = purchy_payload(code_no="x")
    with pytest.raises(ValidationError) as exc:
        PurchyCreateModel.model_validate(payload)

    (err,) = format_validation_errors(exc.value, payload)
    assert err == {
        "type": "field",
        "value": "x",
        "msg": "Code number must be numeric",
        "path": "code_no",
        "location": "body",
    }


def test_parse_date_normalizes_to_naive_utc():
    assert parse_purchy_date("2024-01-01") == datetime(2024, 1, 1)
    assert parse_purchy_date("2024-01-01T05:30:00+05:30") == datetime(2024, 1, 1)
    with pytest.raises(ValueError):
        parse_purchy_date("01/01/2024")


def test_coerce_update_fields_casts_and_drops():
    patch = coerce_update_fields({
        "code_no": "12",
        "purchy_no": "P1",
        "price": "250",
        "date": "2024-03-01",
        "farmer_name": "Shyam",
        "unknown": 1,
    })
    assert patch == {
        "price": 250.0,
        "date": datetime(2024, 3, 1),
        "farmer_name": "Shyam",
    }


def test_coerce_update_fields_rejects_bad_numbers():
    with pytest.raises(ValueError):
        coerce_update_fields({"weight": "heavy"})


def test_coerce_update_fields_rejects_non_finite_and_objects():
    with pytest.raises(ValueError):
        coerce_update_fields({"price": "inf"})
    with pytest.raises(ValueError):
        coerce_update_fields({"weight": float("nan")})
    with pytest.raises(TypeError):
        coerce_update_fields({"farmer_name": {"a": 1}})


def test_boolean_weight_and_price_are_rejected():
    errors = _errors_for(purchy_payload(weight=True, price=False))
    assert errors == {
        "weight": "Weight must be a positive number",
        "price": "Price must be a positive number",
    }
