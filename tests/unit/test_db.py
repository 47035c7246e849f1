from sqlalchemy import event

from app.core import db
from app.core.config import LOG_LEVEL


def test_sql_logging_listener_follows_log_level():
    registered = event.contains(db.engine, "before_cursor_execute", db.before_cursor_execute)
    assert registered is (LOG_LEVEL.upper() == "TRACE")
