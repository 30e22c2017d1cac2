from datetime import datetime

SECRET_KEY = "test-secret"

SQLALCHEMY_DATABASE_URI = "sqlite://"
SQLALCHEMY_TRACK_MODIFICATIONS = False

MEMBERS_URL = "http://members.test"
MEMBERS_SESSION_COOKIE = "session"
MEMBERS_TIMEOUT_SECONDS = 1.0

SIGNIN_IP_WHITELIST: list[str] = []

PERMANENT_SESSION_LIFETIME = 3600

STRIKE_REPORT_START = datetime(2016, 1, 10)
STRIKE_MIN_HOURS = 5

SOCKETIO_ASYNC_MODE = "threading"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
