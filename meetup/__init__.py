from flask import Flask

from meetup.cli import register_commands
from meetup.clock import utc_now
from meetup.config import Config
from meetup.extensions import db, login_manager, migrate
from meetup.gateways.database import SqlAlchemyGateway
from meetup.models import User
from meetup.routes import register_routes


def create_app(test_config=None, clock=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    app.extensions["meetup_gateway"] = SqlAlchemyGateway(clock=clock or utc_now)

    register_routes(app)
    register_commands(app)
    return app


__all__ = ["db", "migrate", "create_app"]
