from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import ConflictError, StoreUnavailableError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _record_to_dict(r) -> dict:
    return {
        "id": r.log_id,
        "employee_id": r.employee_id,
        "action_type": r.action_type.value,
        "timestamp": r.timestamp.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/employees/<int:employee_id>/status", methods=["GET"], endpoint="api_status")
    def api_status(employee_id: int):
        status = container.attendance_service.get_status(employee_id)
        return jsonify({"success": True, "status": status.to_dict()}), 200

    @app.route("/api/employees/<int:employee_id>/actions", methods=["POST"], endpoint="api_submit_action")
    def api_submit_action(employee_id: int):
        data = request.get_json(silent=True) or {}
        try:
            record = container.attendance_service.submit_action(employee_id, data.get("action_type"))
        except ValidationError as e:
            return _fail(str(e), 400)
        except ConflictError:
            return _fail("Your status changed while saving; please try again", 409)
        except StoreUnavailableError:
            logger.exception("submit_action failed for employee %s", employee_id)
            return _fail("Service temporarily unavailable, please retry later", 503)

        status = container.attendance_service.get_status(employee_id)
        return jsonify({"success": True, "record": _record_to_dict(record), "status": status.to_dict()}), 201

    @app.route("/api/employees/<int:employee_id>/logs/today", methods=["GET"], endpoint="api_today_logs")
    def api_today_logs(employee_id: int):
        try:
            logs = container.attendance_service.get_today_logs(employee_id)
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "logs": [_record_to_dict(r) for r in logs]}), 200

    @app.route("/api/employees/<int:employee_id>/logs", methods=["GET"], endpoint="api_history")
    def api_history(employee_id: int):
        limit = request.args.get("limit", type=int) or 30
        try:
            logs = container.attendance_service.get_history(employee_id, limit=max(1, min(limit, 500)))
        except StoreUnavailableError:
            return _fail("Service temporarily unavailable, please retry later", 503)
        return jsonify({"success": True, "logs": [_record_to_dict(r) for r in logs]}), 200
