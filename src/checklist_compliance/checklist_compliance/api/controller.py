from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..container import Container
from ..core.enums import RejectionKind
from ..core.exceptions import ComplianceRejection, ValidationError
from ..geofence.model import Coordinate

logger = logging.getLogger(__name__)

_NOT_FOUND = {
    RejectionKind.UNKNOWN_CHECKLIST,
    RejectionKind.UNKNOWN_ACTIVITY,
    RejectionKind.UNKNOWN_ACTOR,
}


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _require_int(data: dict, key: str) -> int:
        value = data.get(key)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{key} is required and must be an integer") from None

    def _optional_int(value) -> int | None:
        if value in (None, "", "all"):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError("site_id must be an integer or 'all'") from None

    @app.errorhandler(ComplianceRejection)
    def _on_rejection(e: ComplianceRejection):
        status = 404 if e.kind in _NOT_FOUND else 400
        return jsonify(e.to_dict()), status

    @app.errorhandler(ValidationError)
    def _on_validation(e: ValidationError):
        return jsonify({"error": "ValidationError", "message": str(e)}), 400

    @app.errorhandler(Exception)
    def _on_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return jsonify({"error": "Internal server error", "message": str(e)}), 500
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/geofence/validate", methods=["POST"], endpoint="geofence_validate")
    def geofence_validate():
        data = _payload()
        checklist_id = _require_int(data, "checklist_id")
        point = Coordinate.parse(data.get("latitude"), data.get("longitude"))

        check = container.geofence_service.validate_location(checklist_id, point)
        return jsonify(check.to_dict()), (200 if check.valid else 400)

    @app.route("/api/activities/complete", methods=["POST"], endpoint="activities_complete")
    def activities_complete():
        data = _payload()
        event = container.completion_service.record_completion(
            _require_int(data, "checklist_id"),
            _require_int(data, "activity_id"),
            _require_int(data, "actor_id"),
            point=Coordinate.parse_optional(data.get("latitude"), data.get("longitude")),
            photo_ref=data.get("photo") or None,
        )
        return jsonify(event.to_dict()), 201

    @app.route("/api/activities/checklists", methods=["GET"], endpoint="activities_checklists")
    def activities_checklists():
        actor_id = _require_int(request.args, "actor_id")
        statuses = container.score_service.checklist_statuses(actor_id)
        return jsonify([s.to_dict() for s in statuses])

    @app.route("/api/insights", methods=["GET"], endpoint="insights")
    def insights():
        site_id = _optional_int(request.args.get("site_id"))
        period = request.args.get("period") or "month"
        result = container.insights_service.get_insights(site_id, period)
        return jsonify(result.to_dict())
