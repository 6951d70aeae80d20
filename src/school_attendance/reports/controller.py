from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_month, today_local
from ..container import Container
from ..core.enums import Role
from ..users.guards import auth_required, current_identity
from ..web.extensions import teacher_limit


def register(app: Flask, container: Container) -> None:
    teacher_required = auth_required(container, role=Role.TEACHER)

    @app.route("/api/teacher/stats", methods=["GET"], endpoint="teacher_stats")
    @teacher_limit
    @teacher_required
    def teacher_stats():
        data = container.report_service.today_stats(teacher_email=current_identity().email, today=today_local())
        return jsonify(data)

    @app.route("/api/teacher/attendance75", methods=["GET"], endpoint="attendance_below_threshold")
    @teacher_limit
    @teacher_required
    def attendance_below_threshold():
        data = container.report_service.below_threshold(teacher_email=current_identity().email, today=today_local())
        return jsonify(data)

    @app.route("/api/teacher/attendanceDetails", methods=["GET"], endpoint="attendance_details")
    @teacher_limit
    @teacher_required
    def attendance_details():
        raw = request.args.get("month")
        month = parse_month(raw) if raw else today_local()
        data = container.report_service.monthly_details(teacher_email=current_identity().email, month=month)
        return jsonify(data)
