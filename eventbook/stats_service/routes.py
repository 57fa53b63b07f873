"""
Stats service route: dashboard registration statistics.
"""

from typing import Tuple

from flask import Blueprint, jsonify, Response

from eventbook.database.db_connection import get_db
from eventbook.stats_service.aggregates import registration_stats

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("/registrations", methods=["GET"])
def get_registration_stats() -> Tuple[Response, int]:
    """
    Aggregate order statistics for the organizer dashboard.

    Returns:
        200: Stats object (see stats_service.aggregates.registration_stats).
        500: Database error.
    """
    with get_db() as db:
        stats = registration_stats(db)

    return jsonify(stats), 200
