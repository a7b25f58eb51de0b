from flask import Flask

from portal.config import Config
from portal.extensions import db, login_manager, migrate
from portal.models import User
from portal.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return User.query.get(int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return {"ok": False, "error": "Please sign in to continue."}, 401

    register_routes(app)
    return app


__all__ = ["db", "migrate", "create_app"]
