from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard(user):
        view = container.dashboard_service.build(user, now=now_local())
        return ok(dashboard=view.to_dict())
