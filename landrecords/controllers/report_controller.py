from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from landrecords.models.user import ROLE_ADMIN, ROLE_SECTION_HEAD
from landrecords.services.report_service import ReportService
from landrecords.utils.auth import current_identity
from landrecords.utils.decorators import role_required
from landrecords.utils.serializers import report_row_to_dict

report_bp = Blueprint("reports", __name__)


@report_bp.get("/documents")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def document_report():
    return jsonify({"success": True, "data": ReportService.document_report()})


@report_bp.get("/users")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def user_borrowing_report():
    return jsonify({"success": True, "data": ReportService.user_borrowing_report()})


@report_bp.get("/overdue")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def overdue_report():
    rows = ReportService.overdue_report()
    return jsonify({"success": True, "data": [report_row_to_dict(r) for r in rows]})


@report_bp.get("/dashboard")
@jwt_required()
def dashboard():
    identity = current_identity()
    stats = ReportService.dashboard_for(identity.user_id, identity.role, identity.section)
    return jsonify({"success": True, "data": stats})
