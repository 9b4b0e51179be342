"""
Flask Extensions

The observation history lives on the application instance, one store per
app, so tests and multiple apps in one process never share it.
"""

from flask import current_app

from clearsky.services.history import HistoryStore

HISTORY_EXTENSION_KEY = 'clearsky.history'


def init_history(app):
    """Attach a fresh HistoryStore sized by HISTORY_CAPACITY to ``app``."""
    store = HistoryStore(capacity=app.config['HISTORY_CAPACITY'])
    app.extensions[HISTORY_EXTENSION_KEY] = store
    return store


def get_history_store():
    """Return the HistoryStore of the current application."""
    return current_app.extensions[HISTORY_EXTENSION_KEY]
