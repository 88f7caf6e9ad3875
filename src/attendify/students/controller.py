from __future__ import annotations

from flask import Flask, request

from ..common.web import login_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students")
    @login_required
    def students(user):
        found = container.student_service.search(
            current_role=user.role,
            term=request.args.get("q", ""),
            section=request.args.get("section"),
        )
        return ok(students=[s.to_dict() for s in found], count=len(found))

    @app.route("/api/students", methods=["POST"], endpoint="students_add")
    @login_required
    def students_add(user):
        data = payload()
        student = container.student_service.add_student(
            current_role=user.role,
            name=data.get("name", ""),
            email=data.get("email", ""),
            registration_number=data.get("registration_number", ""),
            semester=data.get("semester", ""),
            branch=data.get("branch", ""),
            section=data.get("section", ""),
        )
        return ok(message="Student added successfully", student=student.to_dict()), 201

    @app.route("/api/students/delete", methods=["POST"], endpoint="students_delete")
    @login_required
    def students_delete(user):
        ids = payload().get("ids") or []
        deleted = container.student_service.delete_selected(current_role=user.role, student_ids=list(ids))
        return ok(deleted=deleted)
