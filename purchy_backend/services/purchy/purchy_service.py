# purchy_backend/services/purchy/purchy_service.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from purchy_backend.models.purchy.purchy_models import PurchyCreateModel, TRANSPORT_STATUSES
from purchy_backend.models.purchy.search_models import PurchySearchFilters

ACCEPTED_STATUS_UPDATES = {s.lower() for s in TRANSPORT_STATUSES}


def _iso(dt: datetime) -> str:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat(timespec="milliseconds") + "Z"


def serialize_purchy(doc: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            out[k] = str(v)
        elif isinstance(v, datetime):
            out[k] = _iso(v)
        else:
            out[k] = v
    return out


class PurchyService:
    """
    All reads and writes against the purchies collection.
    One instance is built at startup and shared by every request.
    """

    COL = "purchies"

    def __init__(self, collection):
        self.col = collection

    @classmethod
    def from_db(cls, db) -> "PurchyService":
        return cls(db[cls.COL])

    def ensure_indexes(self):
        self.col.create_index([("purchy_no", 1)], unique=True, name="uq_purchy_no")
        self.col.create_index([("code_no", 1), ("purchy_no", 1)], name="idx_code_purchy")

    # ------------------------------------------------------------
    # Create
    # ------------------------------------------------------------
    def add_purchy(self, payload: PurchyCreateModel) -> Dict[str, Any]:
        """Raises DuplicateKeyError when purchy_no already exists."""
        doc = payload.to_document(datetime.now(timezone.utc))
        res = self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return serialize_purchy(doc)

    # ------------------------------------------------------------
    # Read
    # ------------------------------------------------------------
    def search(self, filters: PurchySearchFilters) -> List[Dict[str, Any]]:
        return [serialize_purchy(d) for d in self.col.find(filters.to_query())]

    def find_purchy(self, code_no: str, purchy_no: str) -> Optional[Dict[str, Any]]:
        doc = self.col.find_one({"code_no": code_no, "purchy_no": purchy_no})
        return serialize_purchy(doc) if doc else None

    # ------------------------------------------------------------
    # Update
    # ------------------------------------------------------------
    def _update(self, query: Dict[str, Any], patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        patch = {**patch, "updatedAt": datetime.now(timezone.utc)}
        doc = self.col.find_one_and_update(
            query,
            {"$set": patch},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_purchy(doc) if doc else None

    def update_purchy(self, code_no: str, purchy_no: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._update({"code_no": code_no, "purchy_no": purchy_no}, patch)

    def update_transport_status(self, purchy_no: str, status: str) -> Optional[Dict[str, Any]]:
        # stored lowercase even though the declared values are Paid / Unpaid
        return self._update({"purchy_no": purchy_no}, {"transport_status": status.lower()})
