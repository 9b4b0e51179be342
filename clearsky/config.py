"""
Configuration settings for the ClearSky air quality service
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Flask application configuration"""

    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

    # WAQI (World Air Quality Index) feed
    WAQI_BASE_URL = os.environ.get('WAQI_BASE_URL') or 'https://api.waqi.info/feed/'
    WAQI_TOKEN = os.environ.get('WAQI_TOKEN') or 'demo'

    # Nominatim place search
    NOMINATIM_URL = os.environ.get('NOMINATIM_URL') or 'https://nominatim.openstreetmap.org/search'
    GEOCODE_LIMIT = 8
    GEOCODE_USER_AGENT = 'ClearSky-AirQuality/1.0'

    REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT') or 6)

    # In-memory history
    HISTORY_CAPACITY = int(os.environ.get('HISTORY_CAPACITY') or 500)
    HISTORY_DEFAULT_DAYS = 7
    HISTORY_MAX_DAYS = 90

    # Browser client
    CORS_ORIGIN = os.environ.get('CORS_ORIGIN') or 'http://localhost:5173'
    FRONTEND_DIST = os.environ.get('FRONTEND_DIST') or os.path.join(basedir, 'frontend', 'dist')

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    WAQI_BASE_URL = 'https://waqi.test/feed/'
    WAQI_TOKEN = 'test-token'
    NOMINATIM_URL = 'https://nominatim.test/search'
    HISTORY_CAPACITY = 5
    FRONTEND_DIST = os.path.join(Config.basedir, 'instance', 'no-frontend')
    LOG_LEVEL = 'DEBUG'
