"""Lab Hours package.

Tracks student lab sessions signed in/out through web forms, SMS commands and
RFID tag scans. Organized by feature modules (students, mentors, lab_sessions,
sms, tags, reports) with a thin Flask controller layer over service and
repository layers.
"""

__version__ = "1.0.0"
