from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ReportNotFoundError, ShiftOverrideNotFoundError, ValidationError
from ..shifts.model import OPERATIONS_TEMPLATES

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/reports/<report_id>/shifts", methods=["GET"], endpoint="api_shifts_list")
    def api_shifts_list(report_id: str):
        try:
            overrides = container.override_service.list(report_id=report_id)
            return jsonify({
                "success": True,
                "shifts": [o.to_dict() for o in overrides],
                "templates": [
                    {"label": t.label, "start_time": t.start_time, "display": t.display} for t in OPERATIONS_TEMPLATES
                ],
            })
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Failed to list shifts for %s", report_id)
            return _error("Failed to load shifts", 500)

    @app.route("/api/reports/<report_id>/shifts/<employee_id>", methods=["PUT"], endpoint="api_shifts_assign")
    def api_shifts_assign(report_id: str, employee_id: str):
        data = request.get_json(silent=True) or {}
        try:
            override = container.override_service.assign(
                report_id=report_id,
                employee_id=employee_id,
                shift=str(data.get("shift") or ""),
                note=data.get("note") or None,
            )
            logger.info("Assigned shift %s to %s in report %s", override.shift_time, employee_id, report_id)
            return jsonify({"success": True, "shift": override.to_dict()})
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to assign shift for %s in %s", employee_id, report_id)
            return _error("Failed to assign shift", 500)

    @app.route("/api/reports/<report_id>/shifts/<employee_id>", methods=["DELETE"], endpoint="api_shifts_remove")
    def api_shifts_remove(report_id: str, employee_id: str):
        try:
            container.override_service.remove(report_id=report_id, employee_id=employee_id)
            return jsonify({"success": True, "message": "Shift assignment removed"})
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ShiftOverrideNotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Failed to remove shift for %s in %s", employee_id, report_id)
            return _error("Failed to remove shift", 500)
