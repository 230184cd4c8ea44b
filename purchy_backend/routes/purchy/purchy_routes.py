# purchy_backend/routes/purchy/purchy_routes.py

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from purchy_backend.models.purchy.purchy_models import (
    PurchyCreateModel,
    PurchyLookupModel,
    coerce_update_fields,
    format_validation_errors,
)
from purchy_backend.models.purchy.search_models import PurchySearchFilters
from purchy_backend.mongo import get_purchy_service
from purchy_backend.services.purchy.purchy_service import ACCEPTED_STATUS_UPDATES

purchy_bp = Blueprint("purchy", __name__)


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ------------------------------------------------------------
# CREATE
# POST /add-purchy
# ------------------------------------------------------------
@purchy_bp.post("/add-purchy")
def add_purchy():
    data = _json_body()
    try:
        payload = PurchyCreateModel.model_validate(data)
    except ValidationError as e:
        return jsonify(errors=format_validation_errors(e, data)), 400

    try:
        purchy = get_purchy_service().add_purchy(payload)
    except DuplicateKeyError:
        current_app.logger.warning("duplicate purchy_no %r", payload.purchy_no)
        return jsonify(error="Purchy number must be unique"), 400
    except Exception as e:
        current_app.logger.exception("Error adding purchy")
        return jsonify(error="Failed to add purchy", details=str(e)), 500

    return jsonify(message="Purchy added successfully", purchy=purchy), 201


# ------------------------------------------------------------
# SEARCH (all optional filters, AND-ed)
# POST /search
# ------------------------------------------------------------
@purchy_bp.post("/search")
def search_purchies():
    filters = PurchySearchFilters.from_payload(_json_body())
    try:
        results = get_purchy_service().search(filters)
    except Exception as e:
        current_app.logger.exception("Error in search")
        return jsonify(message="Internal Server Error", error=str(e)), 500

    return jsonify(results)


# ------------------------------------------------------------
# FETCH ONE
# GET /search-purchy?code_no=...&purchy_no=...
# ------------------------------------------------------------
@purchy_bp.get("/search-purchy")
def search_single_purchy():
    code_no = request.args.get("code_no") or ""
    purchy_no = request.args.get("purchy_no") or ""

    if not code_no or not purchy_no:
        return jsonify(
            success=False,
            message="Both code number and purchy number are required",
        ), 400

    try:
        purchy = get_purchy_service().find_purchy(code_no, purchy_no)
    except Exception as e:
        current_app.logger.exception("Error searching purchy")
        return jsonify(success=False, message="Internal server error", error=str(e)), 500

    if not purchy:
        return jsonify(success=False, message="Purchy not found")

    return jsonify(success=True, purchy=purchy)


# ------------------------------------------------------------
# GENERAL UPDATE (partial)
# PUT /update-purchy
# ------------------------------------------------------------
@purchy_bp.put("/update-purchy")
def update_purchy():
    data = _json_body()
    try:
        ident = PurchyLookupModel.model_validate(data)
    except ValidationError as e:
        return jsonify(errors=format_validation_errors(e, data)), 400

    try:
        patch = coerce_update_fields(data)
        updated = get_purchy_service().update_purchy(ident.code_no, ident.purchy_no, patch)
    except Exception as e:
        current_app.logger.exception("Error updating purchy")
        return jsonify(message="Failed to update purchy", error=str(e)), 500

    if not updated:
        return jsonify(success=False, message="Purchy not found"), 404

    return jsonify(success=True, message="Purchy updated successfully!", updatedPurchy=updated)


# ------------------------------------------------------------
# TRANSPORT STATUS
# POST /update-transport-status
# ------------------------------------------------------------
@purchy_bp.post("/update-transport-status")
def update_transport_status():
    data = _json_body()
    purchy_no = data.get("purchy_no")
    status = data.get("transport_status")

    if not purchy_no or not status:
        return jsonify(
            success=False,
            message="Purchy number and transport status are required",
        ), 400

    if not isinstance(status, str) or status.lower() not in ACCEPTED_STATUS_UPDATES:
        return jsonify(
            success=False,
            message='Invalid transport status. Must be either "paid" or "unpaid"',
        ), 400

    try:
        updated = get_purchy_service().update_transport_status(str(purchy_no), status)
    except Exception as e:
        current_app.logger.exception("Error updating transport status")
        return jsonify(success=False, message="Internal server error", error=str(e)), 500

    if not updated:
        return jsonify(success=False, message="Purchy not found"), 404

    return jsonify(
        success=True,
        message="Transport status updated successfully",
        purchy=updated,
    )
