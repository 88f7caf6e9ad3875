from __future__ import annotations

from flask import Flask, session

from ..common.web import login_required, ok, payload
from ..container import Container
from .service import parse_role
from .session import AuthSession


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        auth = AuthSession.load(session)
        auth.login(user)
        session.permanent = bool(data.get("remember_me"))

        app.logger.info("login: %s (%s)", user.email, user.role.value)
        return ok(user=user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        AuthSession.load(session).logout()
        return ok(message="Logged out")

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = payload()
        user = container.auth_service.signup(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=parse_role(data.get("role")),
            registration_number=data.get("registration_number", ""),
            semester=data.get("semester", ""),
            branch=data.get("branch", ""),
            section=data.get("section", ""),
        )
        AuthSession.load(session).login(user)
        return ok(user=user.to_dict()), 201

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me(user):
        return ok(user=user.to_dict(), sections=list(container.sections))
