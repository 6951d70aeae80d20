from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month, today_local
from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import Role
from ..users.guards import auth_required, current_identity
from ..web.extensions import student_limit, teacher_limit
from .parsing import parse_mark_request


def register(app: Flask, container: Container) -> None:
    teacher_required = auth_required(container, role=Role.TEACHER)
    student_required = auth_required(container, role=Role.STUDENT)

    @app.route("/api/teacher/markAttendance", methods=["POST"], endpoint="mark_attendance")
    @teacher_limit
    @teacher_required
    def mark_attendance():
        mark = parse_mark_request(request.get_json(silent=True))
        summary = container.attendance_service.mark_attendance(
            teacher_email=current_identity().email,
            day=mark.day,
            entries=mark.entries,
        )

        body = {
            "message": "Attendance processing completed",
            "summary": {"total": summary.total, "marked": summary.marked, "skipped": summary.skipped},
        }
        if summary.skipped:
            body["skippedDetails"] = [s.to_dict() for s in summary.skipped_details]
        return jsonify(body)

    @app.route("/api/teacher/dailyAttendance", methods=["GET"], endpoint="daily_attendance")
    @teacher_limit
    @teacher_required
    def daily_attendance():
        raw = request.args.get("date")
        day = parse_iso_date(raw) if raw else today_local()

        rows = container.attendance_service.daily_attendance(teacher_email=current_identity().email, day=day)
        return jsonify(
            {
                "date": day.isoformat(),
                "students": [
                    {
                        "id": r.id,
                        "name": r.name,
                        "email": r.email,
                        "roll_num": r.roll_num,
                        "status": r.status.value if r.status else None,
                    }
                    for r in rows
                ],
            }
        )

    @app.route("/api/student/attendanceCalendar", methods=["POST"], endpoint="attendance_calendar")
    @student_limit
    @student_required
    def attendance_calendar():
        body = require_json_object(request.get_json(silent=True) or {})
        raw_month = body.get("month")
        month = parse_month(raw_month) if raw_month else None

        start, days = container.attendance_service.calendar(
            student_email=current_identity().email,
            month=month,
            today=today_local(),
        )
        return jsonify(
            {
                "month": start.strftime("%Y-%m"),
                "calendar": [{"date": d.day.isoformat(), "status": d.status.value} for d in days],
            }
        )
