from __future__ import annotations

from flask import Flask, request

from ..common.web import error_response, login_required, ok, payload
from ..container import Container
from ..core.exceptions import DomainError
from .form import LectureForm


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetable", methods=["GET"], endpoint="timetable")
    @login_required
    def timetable(user):
        default_section = user.section or container.sections[0]
        section = (request.args.get("section") or default_section).strip()
        days = container.timetable_service.timetable_for(section)
        return ok(section=section, sections=list(container.sections), days=[d.to_dict() for d in days])

    @app.route("/api/timetable", methods=["POST"], endpoint="timetable_add")
    @login_required
    def timetable_add(user):
        form = LectureForm.from_payload(payload())
        try:
            slot = container.timetable_service.add_class(current_role=user.role, form=form, created_by=user.user_id)
        except DomainError as e:
            # The client keeps what the user typed; the form comes back with the reason.
            return error_response(e, form=form.to_dict())

        return ok(message="Class added successfully", slot=slot.to_dict(), form=form.to_dict()), 201
