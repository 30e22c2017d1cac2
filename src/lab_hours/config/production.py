import os
import urllib.parse
from datetime import datetime

from . import split_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_USER = os.getenv("DB_USER", "hours")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_NAME = os.getenv("DB_NAME", "hours")

SQLALCHEMY_DATABASE_URI = os.getenv(
    "DATABASE_URL",
    f"mysql+mysqlconnector://{DB_USER}:{urllib.parse.quote_plus(DB_PASSWORD)}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
SQLALCHEMY_TRACK_MODIFICATIONS = False

MEMBERS_URL = os.getenv("MEMBERS_URL", "https://members.team254.com")
MEMBERS_SESSION_COOKIE = os.getenv("MEMBERS_SESSION_COOKIE", "session")
MEMBERS_TIMEOUT_SECONDS = float(os.getenv("MEMBERS_TIMEOUT_SECONDS", "5"))

SIGNIN_IP_WHITELIST = split_list(os.getenv("SIGNIN_IP_WHITELIST", ""))

PERMANENT_SESSION_LIFETIME = 3600

STRIKE_REPORT_START = datetime(2016, 1, 10)
STRIKE_MIN_HOURS = int(os.getenv("STRIKE_MIN_HOURS", "5"))

SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE", "threading")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
