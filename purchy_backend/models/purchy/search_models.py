# purchy_backend/models/purchy/search_models.py

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

ALL_STATUSES = "all"


@dataclass(frozen=True)
class ExactMatch:
    """Case-insensitive equality on a string field."""

    value: str

    def to_query(self) -> Dict[str, Any]:
        return {"$regex": f"^{re.escape(self.value)}$", "$options": "i"}


@dataclass(frozen=True)
class RangeBound:
    """Inclusive bound: ``greater`` -> $gte, otherwise $lte."""

    value: float
    greater: bool

    def to_query(self) -> Dict[str, Any]:
        return {"$gte" if self.greater else "$lte": self.value}


Criterion = Union[ExactMatch, RangeBound]


def exact_criterion(raw: Any) -> Optional[ExactMatch]:
    if not raw or isinstance(raw, (dict, list)):
        return None
    return ExactMatch(str(raw))


def range_criterion(raw: Any) -> Optional[RangeBound]:
    """
    raw is {value, comparison}. Anything that does not yield a finite
    number is treated as no filter.
    """
    if not isinstance(raw, dict):
        return None

    value = raw.get("value")
    if not value or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None

    return RangeBound(number, raw.get("comparison") == "greater")


@dataclass(frozen=True)
class PurchySearchFilters:
    session: Optional[ExactMatch] = None
    farmer_name: Optional[ExactMatch] = None
    code_no: Optional[ExactMatch] = None
    transport_status: Optional[ExactMatch] = None
    price: Optional[RangeBound] = None
    weight: Optional[RangeBound] = None

    # filter attribute -> stored document field
    STORAGE_FIELDS = {
        "session": "Session",
        "farmer_name": "farmer_name",
        "code_no": "code_no",
        "transport_status": "transport_status",
        "price": "price",
        "weight": "weight",
    }

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "PurchySearchFilters":
        data = data or {}

        status = data.get("transportStatus")
        if isinstance(status, str) and status.strip().lower() == ALL_STATUSES:
            status = None

        return cls(
            session=exact_criterion(data.get("session")),
            farmer_name=exact_criterion(data.get("farmerName")),
            code_no=exact_criterion(data.get("codeNo")),
            transport_status=exact_criterion(status),
            price=range_criterion(data.get("price")),
            weight=range_criterion(data.get("weight")),
        )

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        for f in fields(self):
            criterion: Optional[Criterion] = getattr(self, f.name)
            if criterion is not None:
                query[self.STORAGE_FIELDS[f.name]] = criterion.to_query()
        return query
