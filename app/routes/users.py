"""
Authenticated-user endpoints.

Endpoints:
    GET /api/user          - Basic information about the token's user
    GET /api/user/profile  - Detailed profile of the token's user
"""

import logging

from flask import Blueprint, Response, g

from app.auth import require_auth
from app.responses import success_response

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__)


@users_bp.route("/user", methods=["GET"])
@require_auth
def me() -> tuple[Response, int]:
    """Return the authenticated user's public fields."""
    logger.info(f"GET /api/user - user_id={g.current_user.id}")
    return success_response(g.current_user.to_dict(), "User information retrieved successfully")


@users_bp.route("/user/profile", methods=["GET"])
@require_auth
def profile() -> tuple[Response, int]:
    """Return the authenticated user's detailed profile."""
    logger.info(f"GET /api/user/profile - user_id={g.current_user.id}")
    return success_response(g.current_user.to_profile(), "User profile retrieved successfully")
