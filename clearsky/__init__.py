"""
ClearSky Air Quality - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS

from clearsky.config import Config
from clearsky.errors import ClearSkyError
from clearsky.extensions import init_history

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Per-app observation history
    init_history(app)

    # Register blueprints
    from clearsky.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/aqi')

    _register_error_handlers(app)

    # Browser client dev server
    CORS(app, origins=app.config['CORS_ORIGIN'], supports_credentials=True)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    _register_frontend(app)

    app.logger.debug('ClearSky app created (history capacity %s)', app.config['HISTORY_CAPACITY'])
    return app


def _configure_logging(app):
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger('clearsky')
    logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


def _register_error_handlers(app):
    @app.errorhandler(ClearSkyError)
    def handle_clearsky_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404


def _register_frontend(app):
    """Serve the built single-page client, falling back to index.html."""
    dist = app.config['FRONTEND_DIST']

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def frontend(path):
        if path.startswith('aqi/') or not os.path.isdir(dist):
            return handle_missing()
        if path and os.path.isfile(os.path.join(dist, path)):
            return send_from_directory(dist, path)
        if os.path.isfile(os.path.join(dist, 'index.html')):
            return send_from_directory(dist, 'index.html')
        return handle_missing()

    def handle_missing():
        return jsonify({'error': 'Not found'}), 404
