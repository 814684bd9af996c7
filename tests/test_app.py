import logging

import pytest
from sqlalchemy.exc import OperationalError

from docvault.core import db as db_module
from docvault.core.logging_config import setup_logging
from docvault.db.repositories import UserRepository


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "DocVault API"


@pytest.mark.asyncio
async def test_health_reports_database(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


@pytest.mark.asyncio
async def test_health_when_database_is_down(client, monkeypatch):
    async def broken_ping(session):
        return False

    monkeypatch.setattr("docvault.api.http.health.ping_db", broken_ping)

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "unreachable"}


@pytest.mark.asyncio
async def test_ping_db_swallows_driver_errors():
    class FailingSession:
        async def execute(self, statement):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    assert await db_module.ping_db(FailingSession()) is False


@pytest.mark.asyncio
async def test_cors_preflight_allows_any_origin(client):
    response = await client.options(
        "/api/users",
        headers={
            "Origin": "http://frontend.example",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://frontend.example")


def test_setup_logging_writes_to_log_dir(tmp_path):
    log_dir = tmp_path / "logs"

    setup_logging(log_level="DEBUG", log_dir=str(log_dir))
    logging.getLogger("docvault.tests").info("hello from the test")
    for handler in logging.getLogger("docvault").handlers:
        handler.flush()

    log_file = log_dir / "docvault.log"
    assert log_file.exists()
    assert "hello from the test" in log_file.read_text()

    setup_logging(log_level="INFO")


@pytest.mark.asyncio
async def test_database_errors_do_not_leak_statement_or_parameters(client, monkeypatch):
    async def failing_get_all(self):
        raise OperationalError(
            "SELECT users.password_hash FROM users", {"p": "stored-hash"}, Exception("db down")
        )

    monkeypatch.setattr(UserRepository, "get_all", failing_get_all)

    response = await client.get("/api/users")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "password_hash" not in response.text
    assert "stored-hash" not in response.text
