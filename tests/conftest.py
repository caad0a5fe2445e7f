"""Shared pytest fixtures for finboard tests."""

import tempfile
import os
from datetime import datetime
import pytest
from dateutil import tz

from finboard.database.factories import create_sqlite_database
from finboard.domain.local_calendar import LocalCalendar
from finboard.domain.recurring import RecurringRuleService
from finboard.domain.settings import SettingsService
from finboard.domain.transaction import TransactionService

# Fixed UTC+2 zone so local-day bucketing differs from UTC
FIXED_ZONE = tz.tzoffset("UTC+2", 2 * 3600)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def calendar():
    """Calendar pinned to a fixed UTC+2 offset."""
    return LocalCalendar(FIXED_ZONE)


@pytest.fixture
def local_dt(calendar):
    """Build aware datetimes in the pinned zone."""

    def build(*args):
        return datetime(*args, tzinfo=calendar.zone)

    return build


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringRuleService with a temporary database."""
    return RecurringRuleService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db):
    """Global CLI options pointing at the temporary database in UTC."""
    return ["--db-path", temp_db.database_path, "--timezone", "UTC"]
