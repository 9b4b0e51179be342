"""
AQI API Blueprint

JSON endpoints consumed by the single-page client, mounted at /aqi.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from clearsky.api import routes  # noqa: E402, F401
