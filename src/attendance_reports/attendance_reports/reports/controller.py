from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file
from werkzeug.utils import secure_filename

from ..container import Container
from ..core.exceptions import ReportNotFoundError, ValidationError
from .exports import export_filename, to_csv_bytes, to_excel_bytes

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _view_args(report_id: str) -> dict:
        return {
            "overrides": container.override_service.as_mapping(report_id=report_id),
            "department": request.args.get("department") or None,
            "employee_id": request.args.get("employee") or None,
            "start": request.args.get("start") or None,
            "end": request.args.get("end") or None,
        }

    @app.route("/api/reports", methods=["POST"], endpoint="api_reports_upload")
    def api_reports_upload():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return _error("No file uploaded", 400)

        file_name = secure_filename(upload.filename) or upload.filename
        try:
            report = container.report_service.create_from_upload(upload.stream, file_name)
            return jsonify({
                "success": True,
                "report_id": report.report_id,
                "message": "Report created successfully",
                "report": report.header_dict(),
            }), 201
        except ValidationError as e:
            logger.warning("Rejected upload %s: %s", file_name, e)
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to process upload %s", file_name)
            return _error("Failed to process file", 500)

    @app.route("/api/reports", methods=["GET"], endpoint="api_reports_list")
    def api_reports_list():
        try:
            rows = container.report_service.list()
            return jsonify({"success": True, "reports": [r.to_dict() for r in rows]})
        except Exception:
            logger.exception("Failed to list reports")
            return _error("Failed to load reports", 500)

    @app.route("/api/reports/<report_id>", methods=["GET"], endpoint="api_reports_get")
    def api_reports_get(report_id: str):
        try:
            report = container.report_service.get(report_id)
            records = container.report_service.records(
                report_id,
                search=request.args.get("search") or None,
                department=request.args.get("department") or None,
                employee_id=request.args.get("employee") or None,
                start=request.args.get("start") or None,
                end=request.args.get("end") or None,
            )
            return jsonify({
                "success": True,
                "report": report.header_dict(),
                "overview": container.report_service.overview(report_id).to_dict(),
                "records": [r.to_dict() for r in records],
            })
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to load report %s", report_id)
            return _error("Failed to load report", 500)

    @app.route("/api/reports/<report_id>", methods=["DELETE"], endpoint="api_reports_delete")
    def api_reports_delete(report_id: str):
        try:
            container.report_service.delete(report_id)
            return jsonify({"success": True, "message": "Report deleted"})
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except Exception:
            logger.exception("Failed to delete report %s", report_id)
            return _error("Failed to delete report", 500)

    @app.route("/api/reports/<report_id>/department-view", methods=["GET"], endpoint="api_reports_department_view")
    def api_reports_department_view(report_id: str):
        try:
            view = container.report_service.department_view(report_id, **_view_args(report_id))
            return jsonify({"success": True, **view.to_dict()})
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to build department view for %s", report_id)
            return _error("Failed to build department view", 500)

    @app.route("/api/reports/<report_id>/export.csv", methods=["GET"], endpoint="api_reports_export_csv")
    def api_reports_export_csv(report_id: str):
        try:
            view = container.report_service.department_view(report_id, **_view_args(report_id))
            return send_file(
                io.BytesIO(to_csv_bytes(view)),
                mimetype="text/csv",
                as_attachment=True,
                download_name=export_filename(view, "csv"),
            )
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("CSV export failed for %s", report_id)
            return _error("Export failed", 500)

    @app.route("/api/reports/<report_id>/export.xlsx", methods=["GET"], endpoint="api_reports_export_xlsx")
    def api_reports_export_xlsx(report_id: str):
        try:
            view = container.report_service.department_view(report_id, **_view_args(report_id))
            return send_file(
                io.BytesIO(to_excel_bytes(view)),
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                as_attachment=True,
                download_name=export_filename(view, "xlsx"),
            )
        except ReportNotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Excel export failed for %s", report_id)
            return _error("Export failed", 500)

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        try:
            return jsonify({"success": True, **container.report_service.dashboard()})
        except Exception:
            logger.exception("Failed to build dashboard")
            return _error("Failed to load dashboard", 500)
