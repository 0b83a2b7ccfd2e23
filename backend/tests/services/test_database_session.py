"""Database session tests — SQLAlchemy failures become API errors."""

import pytest
from sqlalchemy.exc import IntegrityError, InvalidRequestError, OperationalError

from parks_backoffice.core.errors import ConflictError, DatabaseError
from parks_backoffice.infrastructure.database import (
    DatabaseSessionManager, translate_db_error,
)


def test_integrity_error_is_conflict():
    error = translate_db_error(IntegrityError("INSERT", {}, Exception("UNIQUE")))
    assert isinstance(error, ConflictError)
    assert error.http_status == 409


def test_operational_error_is_database_error():
    error = translate_db_error(OperationalError("SELECT 1", {}, Exception("gone")))
    assert isinstance(error, DatabaseError)
    assert error.operation == "execute"


def test_other_sqlalchemy_error_is_database_error():
    error = translate_db_error(InvalidRequestError("bad state"))
    assert isinstance(error, DatabaseError)
    assert error.operation == "unknown"


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield mgr
    await mgr.dispose()


async def test_session_translates_errors(manager):
    with pytest.raises(ConflictError):
        async with manager.session():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE"))


async def test_session_lets_domain_errors_through(manager):
    with pytest.raises(ValueError):
        async with manager.session():
            raise ValueError("not a database problem")


async def test_health_check(manager):
    assert await manager.health_check() is True
