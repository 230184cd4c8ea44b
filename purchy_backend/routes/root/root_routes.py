# purchy_backend/routes/root/root_routes.py

from flask import Blueprint, jsonify

root_bp = Blueprint("root", __name__)


@root_bp.get("/health")
def health():
    return jsonify(ok=True), 200
