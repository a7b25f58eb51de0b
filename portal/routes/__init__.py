from portal.routes.admin import register_admin_routes
from portal.routes.auth import register_auth_routes
from portal.routes.public import register_public_routes
from portal.services.voting.errors import ElectionError


def register_routes(app):
    register_auth_routes(app)
    register_public_routes(app)
    register_admin_routes(app)

    @app.errorhandler(ElectionError)
    def election_error(error):
        return {"ok": False, "error": str(error), "code": error.code}, error.status
