"""Fixed lab rules and defaults shared across modules."""

# Paths reachable without a resolved user
PUBLIC_PATHS = frozenset({"/", "/signin", "/sms", "/tag/live", "/tag_ws"})
PUBLIC_PATH_FRAGMENT = "tag/event"

MEMBERS_SITE_NAME = "hours"

# RFID sign-ins are ignored until this long after the last sign-out
DEBOUNCE_SECONDS = 60

PHONE_NUMBER_DIGITS = 10

SMS_MASS_SIGN_OUT_COMMAND = "gtfo"

STRIKE_WEEK_DAYS = 7
DEFAULT_STRIKE_MIN_HOURS = 5

TAG_SOCKET_NAMESPACE = "/tag_ws"
TAG_SOCKET_EVENT = "message"

DEFAULT_REDIRECT_AFTER_EDIT = "/leader_board"
