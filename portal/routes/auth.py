from flask import current_app, request
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from portal.extensions import db
from portal.models import User

SELF_SERVICE_ROLES = {"voter", "candidate"}


def register_auth_routes(app):
    @app.route("/signup", methods=["POST"])
    def signup():
        username = (request.form.get("username") or "").strip()
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        role = (request.form.get("role") or "voter").strip()

        if not username or not email or not password:
            return {"ok": False, "error": "Username, email and password are required."}, 400
        if len(password) < 8:
            return {"ok": False, "error": "Password must be at least 8 characters long."}, 400
        if role not in SELF_SERVICE_ROLES:
            return {"ok": False, "error": "Invalid role."}, 400

        if User.query.filter(
            (User.username == username) | (User.email == email)
        ).first():
            return {"ok": False, "error": "Username or email already in use."}, 409

        new_user = User(
            username=username,
            email=email,
            full_name=(request.form.get("full_name") or "").strip() or None,
            role=role,
            password_hash=generate_password_hash(password, method="pbkdf2:sha256"),
        )

        try:
            db.session.add(new_user)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Could not register user %s", username)
            return {"ok": False, "error": "Database error: Could not register user."}, 500

        return {"ok": True, "user": {"id": new_user.id, "username": new_user.username}}, 201

    @app.route("/login", methods=["POST"])
    def login():
        username = request.form.get("username")
        password = request.form.get("password") or ""
        remember = bool(request.form.get("remember"))

        user = User.query.filter_by(username=username).first()
        if not user or not check_password_hash(user.password_hash, password):
            return {"ok": False, "error": "Invalid username or password."}, 401

        login_user(user, remember=remember)
        return {"ok": True, "user": {"id": user.id, "role": user.role}}

    @app.route("/logout")
    @login_required
    def logout():
        current_app.logger.info("User %s signed out", current_user.id)
        logout_user()
        return {"ok": True}
