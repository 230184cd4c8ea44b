# purchy_backend/models/purchy/purchy_models.py

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

TRANSPORT_STATUSES = ("Paid", "Unpaid")

PURCHY_FIELDS = (
    "Session",
    "farmer_name",
    "code_no",
    "purchy_no",
    "date",
    "weight",
    "price",
    "transport_status",
    "transporter_name",
)
IDENTITY_FIELDS = ("code_no", "purchy_no")

_NUMERIC = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")

# field -> (message when missing/empty, message when present but invalid)
FIELD_MESSAGES: Dict[str, Tuple[str, str]] = {
    "Session": ("Session is required", "Session is required"),
    "farmer_name": ("Farmer name is required", "Farmer name is required"),
    "code_no": ("Code number is required", "Code number must be numeric"),
    "purchy_no": ("Purchy number is required", "Purchy number is required"),
    "date": ("Date is required", "Date must be in YYYY-MM-DD format"),
    "weight": ("Weight is required", "Weight must be a positive number"),
    "price": ("Price is required", "Price must be a positive number"),
    "transport_status": (
        "Transport status is required",
        "Transport status must be either Paid or Unpaid",
    ),
    "transporter_name": ("Transporter name is required", "Transporter name is required"),
}


def _require(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        raise PydanticCustomError("empty", "value is required")
    return v


def _scalar_text(v: Any) -> str:
    v = _require(v)
    if isinstance(v, (dict, list)):
        raise PydanticCustomError("not_text", "value must be text")
    return str(v)


def parse_purchy_date(value: Any) -> datetime:
    """
    Accepts YYYY-MM-DD or a full ISO 8601 timestamp.
    Returns a naive UTC datetime (what pymongo hands back on read).
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if len(text) == 10:
            parsed = datetime.strptime(text, "%Y-%m-%d")
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class PurchyCreateModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    Session: str
    farmer_name: str
    code_no: str
    purchy_no: str
    date: datetime
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    transport_status: Literal["Paid", "Unpaid"]
    transporter_name: str

    @field_validator("Session", "farmer_name", "purchy_no", "transporter_name", mode="before")
    @classmethod
    def _required_text(cls, v):
        return _scalar_text(v)

    @field_validator("code_no", mode="before")
    @classmethod
    def _numeric_code(cls, v):
        text = _scalar_text(v)
        if not _NUMERIC.match(text):
            raise PydanticCustomError("not_numeric", "code_no must be numeric")
        return text

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, v):
        _require(v)
        try:
            return parse_purchy_date(v)
        except (TypeError, ValueError):
            raise PydanticCustomError("bad_date", "date must be YYYY-MM-DD")

    @field_validator("weight", "price", mode="before")
    @classmethod
    def _positive_number(cls, v):
        if isinstance(_require(v), bool):
            raise PydanticCustomError("not_number", "value must be a number")
        return v

    @field_validator("transport_status", mode="before")
    @classmethod
    def _present(cls, v):
        return _require(v)

    def to_document(self, now: datetime) -> Dict[str, Any]:
        doc = self.model_dump()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        return doc


class PurchyLookupModel(BaseModel):
    """Identifies one purchy for the general update."""

    model_config = ConfigDict(extra="ignore")

    code_no: str
    purchy_no: str

    @field_validator("code_no", "purchy_no", mode="before")
    @classmethod
    def _required_text(cls, v):
        return str(_require(v))


def format_validation_errors(exc: ValidationError, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Flatten a pydantic ValidationError into per-field error objects:
      {type, value, msg, path, location}
    """
    out: List[Dict[str, Any]] = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else ""
        required_msg, invalid_msg = FIELD_MESSAGES.get(
            field, (f"{field} is required", f"{field} is invalid")
        )
        msg = required_msg if err["type"] in ("missing", "empty") else invalid_msg
        out.append({
            "type": "field",
            "value": payload.get(field, ""),
            "msg": msg,
            "path": field,
            "location": "body",
        })
    return out


def coerce_update_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only schema fields (minus the identifiers) and cast them the way
    the stored document expects. Raises ValueError/TypeError on a bad cast.
    """
    patch: Dict[str, Any] = {}
    for key in PURCHY_FIELDS:
        if key in IDENTITY_FIELDS or key not in data:
            continue
        value = data[key]
        if value is None:
            patch[key] = None
        elif key == "date":
            patch[key] = parse_purchy_date(value)
        elif key in ("weight", "price"):
            if isinstance(value, bool):
                raise TypeError(f"{key} must be a number")
            number = float(value)
            if not math.isfinite(number):
                raise ValueError(f"{key} must be a finite number")
            patch[key] = number
        elif isinstance(value, (dict, list)):
            raise TypeError(f"{key} must be text")
        else:
            patch[key] = str(value)
    return patch
