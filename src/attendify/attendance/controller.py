from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import login_required, ok, payload, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .service import MARKING_ROLES
from .tracker import AttendanceTracker

MARKING_KEY = "marking"


def register(app: Flask, container: Container) -> None:
    def _current_tracker() -> AttendanceTracker:
        data = session.get(MARKING_KEY)
        if not data:
            raise ValidationError("No marking session in progress")
        return AttendanceTracker.from_dict(data)

    def _check_token(tracker: AttendanceTracker, token) -> None:
        # A change must carry the token of the session it was made for.
        if not token:
            raise ValidationError("Marking session token is required")
        if str(token) != tracker.token:
            raise ValidationError("This marking session is no longer active")

    def _save(tracker: AttendanceTracker) -> None:
        session[MARKING_KEY] = tracker.to_dict()

    @app.route("/api/attendance/session", methods=["POST"], endpoint="attendance_start")
    @login_required
    @roles_required(*MARKING_ROLES)
    def attendance_start(user):
        data = payload()
        date_s = data.get("date") or now_local().date().strftime("%Y-%m-%d")
        tracker = container.attendance_service.start_session(
            current_role=user.role,
            section=data.get("section") or container.sections[0],
            attend_date=parse_iso_date(date_s),
            subject=data.get("subject", ""),
        )
        existing = container.attendance_service.existing_marks(tracker)
        _save(tracker)
        return ok(
            session=tracker.to_dict(),
            existing={r.student_id: r.status.value for r in existing},
        )

    @app.route("/api/attendance/session", methods=["GET"], endpoint="attendance_current")
    @login_required
    @roles_required(*MARKING_ROLES)
    def attendance_current(user):
        return ok(session=_current_tracker().to_dict())

    @app.route(
        "/api/attendance/session/toggle/<student_id>", methods=["POST"], endpoint="attendance_toggle"
    )
    @login_required
    @roles_required(*MARKING_ROLES)
    def attendance_toggle(user, student_id: str):
        tracker = _current_tracker()
        _check_token(tracker, payload().get("token"))
        status = tracker.toggle(student_id)
        _save(tracker)
        return ok(student_id=student_id, status=status.value, pending=len(tracker.pending()))

    @app.route("/api/attendance/session/mark-all", methods=["POST"], endpoint="attendance_mark_all")
    @login_required
    @roles_required(*MARKING_ROLES)
    def attendance_mark_all(user):
        tracker = _current_tracker()
        _check_token(tracker, payload().get("token"))
        tracker.mark_all_present()
        _save(tracker)
        return ok(session=tracker.to_dict())

    @app.route("/api/attendance/session/submit", methods=["POST"], endpoint="attendance_submit")
    @login_required
    @roles_required(*MARKING_ROLES)
    def attendance_submit(user):
        tracker = _current_tracker()
        _check_token(tracker, payload().get("token"))

        stats = container.attendance_service.submit(current_role=user.role, tracker=tracker, marked_by=user.user_id)

        _save(tracker)
        return ok(message="Attendance submitted successfully", stats=stats.to_dict(), session=tracker.to_dict())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history(user):
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        section = request.args.get("section") or None
        student_id = request.args.get("student_id") or None

        # Students only ever see their own records.
        if user.role == Role.STUDENT:
            if not user.student_id:
                raise ValidationError("No student profile is linked to this account")
            student_id = user.student_id
            section = None

        rows, stats = container.attendance_service.history(
            section=section,
            student_id=student_id,
            start=parse_iso_date(start_s) if start_s else None,
            end=parse_iso_date(end_s) if end_s else None,
        )
        return ok(records=rows, stats=stats.to_dict())
