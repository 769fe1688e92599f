import logging
from functools import wraps

from flask import current_app, jsonify, request

from schoolboard.errors import StoreError

logger = logging.getLogger(__name__)


def get_store():
    return current_app.extensions['record_store']


def get_resolver():
    return current_app.extensions['blob_resolver']


def json_payload():
    """Request JSON body as a dict; missing or malformed bodies read as {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def client_error(message):
    # Validation failures are reported with HTTP 200 and an 'error' key.
    return jsonify({'error': message})


def store_errors(message):
    """Answer HTTP 500 with ``message`` when the view hits a StoreError."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except StoreError:
                logger.exception('%s failed', request.path)
                return jsonify({'error': message}), 500
        return decorated
    return decorator


def file_too_large(e):
    """RequestEntityTooLarge handler for views that accept files."""
    logger.info('Rejected %s: body over MAX_CONTENT_LENGTH', request.path)
    return client_error('File too large')
