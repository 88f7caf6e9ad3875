from __future__ import annotations

from flask import Flask, request

from ..common.web import login_required, ok, payload
from ..container import Container


def _subjects(raw) -> list[str]:
    if isinstance(raw, str):
        return raw.split(",")
    return [str(s) for s in (raw or [])]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/faculty", methods=["GET"], endpoint="faculty")
    @login_required
    def faculty(user):
        found = container.faculty_service.search(current_role=user.role, term=request.args.get("q", ""))
        return ok(faculty=[f.to_dict() for f in found], count=len(found))

    @app.route("/api/faculty", methods=["POST"], endpoint="faculty_add")
    @login_required
    def faculty_add(user):
        data = payload()
        member = container.faculty_service.add_faculty(
            current_role=user.role,
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            department=data.get("department", ""),
            subjects=_subjects(data.get("subjects")),
        )
        return ok(message="Faculty member added successfully", faculty=member.to_dict()), 201

    @app.route("/api/faculty/delete", methods=["POST"], endpoint="faculty_delete")
    @login_required
    def faculty_delete(user):
        ids = payload().get("ids") or []
        deleted = container.faculty_service.delete_selected(current_role=user.role, faculty_ids=list(ids))
        return ok(deleted=deleted)
