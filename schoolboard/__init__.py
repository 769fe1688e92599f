import logging

from flask import Flask
from config import Config


def create_app(config_class=Config, store=None, resolver=None):
    """Build the Flask app.

    ``store`` and ``resolver`` override the backends chosen from config,
    which lets tests run against isolated in-memory instances.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    from schoolboard.services.storage import build_resolver
    from schoolboard.store import build_store

    firebase = None
    if app.config.get('STORAGE_BACKEND') == 'firebase' and (store is None or resolver is None):
        from schoolboard.firebase_init import init_firebase
        firebase = init_firebase(app.config)

    app.extensions['record_store'] = store if store is not None else build_store(app.config, firebase)
    app.extensions['blob_resolver'] = resolver if resolver is not None else build_resolver(app.config, firebase)

    # Register blueprints
    from schoolboard.routes import announcements, auth, school, tasks, uploads
    app.register_blueprint(school.bp)
    app.register_blueprint(auth.bp)
    app.register_blueprint(tasks.bp)
    app.register_blueprint(announcements.bp)
    app.register_blueprint(uploads.bp)

    return app
