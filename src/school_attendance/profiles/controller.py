from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import Role
from ..users.guards import auth_required, current_identity
from ..web.extensions import student_limit, teacher_limit


def register(app: Flask, container: Container) -> None:
    teacher_required = auth_required(container, role=Role.TEACHER)
    student_required = auth_required(container, role=Role.STUDENT)

    @app.route("/api/teacher/teacherDetails", methods=["GET"], endpoint="teacher_details")
    @teacher_limit
    @teacher_required
    def teacher_details():
        teacher = container.teacher_service.get_profile(current_identity().email)
        return jsonify(
            {
                "profile": {
                    "name": teacher.name,
                    "id_code": teacher.id,
                    "email": teacher.email,
                    "subject": teacher.subject,
                }
            }
        )

    @app.route("/api/teacher/addStudent", methods=["POST"], endpoint="add_student")
    @teacher_limit
    @teacher_required
    def add_student():
        body = require_json_object(request.get_json(silent=True))
        student_id = container.teacher_service.add_student(
            teacher_email=current_identity().email,
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            subject=body.get("subject"),
            roll_num=body.get("roll_num"),
        )
        return jsonify({"message": "register successful", "id": student_id}), 201

    @app.route("/api/teacher/deleteStudent/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @teacher_limit
    @teacher_required
    def delete_student(student_id: int):
        student = container.teacher_service.delete_student(
            teacher_email=current_identity().email,
            student_id=student_id,
        )
        return jsonify({"message": "Student deleted successfully", "student": {"id": student.id, "email": student.email}})

    @app.route("/api/student/studentDetails", methods=["GET"], endpoint="student_details")
    @student_limit
    @student_required
    def student_details():
        data = container.student_service.get_details(email=current_identity().email, today=today_local())
        return jsonify(data)
