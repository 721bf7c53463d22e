from flask import Flask, jsonify

from landrecords.config import Config
from landrecords.errors import register_error_handlers
from landrecords.extensions import db, migrate, jwt, mail
from landrecords.utils.auth import register_jwt_handlers


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # models must be imported for metadata / migrations
    from landrecords import models  # noqa: F401

    register_error_handlers(app)
    register_jwt_handlers(jwt)

    from landrecords.controllers.auth_controller import auth_bp
    from landrecords.controllers.user_controller import user_bp
    from landrecords.controllers.catalog_controller import (
        property_book_bp,
        survey_deed_bp,
        archival_dossier_bp,
    )
    from landrecords.controllers.borrowing_controller import borrowing_bp
    from landrecords.controllers.notification_controller import notif_bp
    from landrecords.controllers.report_controller import report_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(user_bp, url_prefix="/users")
    app.register_blueprint(property_book_bp, url_prefix="/property-books")
    app.register_blueprint(survey_deed_bp, url_prefix="/survey-deeds")
    app.register_blueprint(archival_dossier_bp, url_prefix="/archival-dossiers")
    app.register_blueprint(borrowing_bp, url_prefix="/borrowings")
    app.register_blueprint(notif_bp, url_prefix="/notifications")
    app.register_blueprint(report_bp, url_prefix="/reports")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from landrecords.cli import register_commands
    register_commands(app)

    return app
