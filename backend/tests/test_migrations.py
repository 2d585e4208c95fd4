"""
Test migration functionality using pytest fixtures
"""

import sqlite3

from athos.services.database import DatabaseService
from athos.services.migration_service import MigrationService


def test_migrations(setup_test_database):
    """DatabaseService applies the bundled schema on startup"""
    db_service = DatabaseService()
    assert db_service.db_path == setup_test_database

    status = db_service.get_migration_status()
    assert status["applied_migrations"] == ["V001__initial_schema"]
    assert status["pending_migrations"] == []

    with sqlite3.connect(str(setup_test_database)) as conn:
        tables = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {
        "users",
        "content",
        "quizzes",
        "progress",
        "content_progress",
        "quiz_results",
        "module_progress",
        "behavior_events",
    } <= tables


def test_migrations_are_applied_once(setup_test_database):
    MigrationService(str(setup_test_database)).apply_pending_migrations()
    service = MigrationService(str(setup_test_database))

    assert service.apply_pending_migrations() is True
    assert service.get_applied_migrations() == ["V001__initial_schema"]


def test_custom_migrations_directory(setup_test_database, tmp_path):
    migrations_dir = tmp_path / "migrations"
    migrations_dir.mkdir()
    (migrations_dir / "V002__extra.sql").write_text("CREATE TABLE extra (id INTEGER);")
    (migrations_dir / "V001__base.sql").write_text("CREATE TABLE base (id INTEGER);")

    service = MigrationService(str(setup_test_database), str(migrations_dir))
    assert service.apply_pending_migrations() is True
    assert service.get_applied_migrations() == ["V001__base", "V002__extra"]


def test_failed_migration_reports_false(setup_test_database, tmp_path):
    migrations_dir = tmp_path / "broken"
    migrations_dir.mkdir()
    (migrations_dir / "V001__broken.sql").write_text("CREATE TABLE (;")

    service = MigrationService(str(setup_test_database), str(migrations_dir))
    assert service.apply_pending_migrations() is False
    assert service.get_migration_status()["pending_migrations"] == ["V001__broken"]
