"""
Migration service that applies the SQL schema files shipped with the package
"""

import sqlite3
import logging
from pathlib import Path
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"


class MigrationService:
    def __init__(self, db_path: str, migrations_dir: str = None):
        self.db_path = Path(db_path)
        self.migrations_dir = (
            Path(migrations_dir) if migrations_dir else DEFAULT_MIGRATIONS_DIR
        )
        logger.debug(f"Migrations directory set to: {self.migrations_dir}")
        self._init_migration_table()

    def _init_migration_table(self):
        """Create the table that records applied migrations"""
        with sqlite3.connect(str(self.db_path)) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    migration_id TEXT NOT NULL UNIQUE,
                    description TEXT,
                    applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """
            )
            conn.commit()

    def get_applied_migrations(self) -> List[str]:
        """Get list of applied migration IDs"""
        with sqlite3.connect(str(self.db_path)) as conn:
            cursor = conn.execute(
                "SELECT migration_id FROM schema_migrations ORDER BY id"
            )
            return [row[0] for row in cursor.fetchall()]

    def apply_migration(self, migration_file: Path) -> bool:
        """Apply a single migration file inside one script execution"""
        migration_id = migration_file.stem
        if migration_id in self.get_applied_migrations():
            logger.info(f"Migration {migration_id} already applied, skipping")
            return True

        try:
            sql_content = migration_file.read_text(encoding="utf-8")
            with sqlite3.connect(str(self.db_path)) as conn:
                conn.executescript(sql_content)
                conn.execute(
                    "INSERT INTO schema_migrations (migration_id, description) VALUES (?, ?)",
                    (migration_id, migration_file.name),
                )
                conn.commit()

            logger.info(f"Successfully applied migration: {migration_id}")
            return True

        except sqlite3.Error as e:
            logger.error(f"Failed to apply migration {migration_id}: {e}")
            return False

    def apply_pending_migrations(self) -> bool:
        """Apply all pending migrations in filename order (V001__, V002__, ...)"""
        applied = self.get_applied_migrations()
        pending = [f for f in self._get_migration_files() if f.stem not in applied]

        if not pending:
            logger.info("No pending migrations")
            return True

        for migration_file in sorted(pending, key=lambda f: f.name):
            if not self.apply_migration(migration_file):
                return False
        return True

    def _get_migration_files(self) -> List[Path]:
        if not self.migrations_dir.exists():
            return []
        return [
            f
            for f in self.migrations_dir.iterdir()
            if f.is_file() and f.suffix.lower() == ".sql"
        ]

    def get_migration_status(self) -> Dict[str, Any]:
        """Get current migration status"""
        applied = self.get_applied_migrations()
        available = [f.stem for f in self._get_migration_files()]

        return {
            "applied_migrations": applied,
            "available_migrations": available,
            "pending_migrations": [m for m in available if m not in applied],
        }
