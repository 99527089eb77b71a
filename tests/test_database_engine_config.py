import os


def test_get_engine_kwargs_sqlite_has_check_same_thread(monkeypatch):
    # Import lazily so monkeypatch can affect env usage deterministically.
    from taskwise.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///./taskwise.db")
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_has_conservative_pooling(monkeypatch):
    from taskwise.database import database as db

    monkeypatch.setenv("DB_POOL_SIZE", "5")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "5")
    monkeypatch.setenv("DB_POOL_TIMEOUT_SEC", "30")

    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 5
    assert kwargs["max_overflow"] == 5
    assert kwargs["pool_timeout"] == 30


def test_debug_env_enables_echo(monkeypatch):
    from taskwise.database import database as db

    monkeypatch.setenv("DEBUG", "true")
    assert db.get_engine_kwargs("sqlite:///./taskwise.db")["echo"] is True
    monkeypatch.setenv("DEBUG", "false")
    assert db.get_engine_kwargs("sqlite:///./taskwise.db")["echo"] is False


def test_sqlite_pragmas_listener_is_guarded():
    # Verify the helper used by the connect event guard behaves as expected.
    from taskwise.database import database as db

    assert db._is_sqlite_url("sqlite:///./taskwise.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_migration_creates_tasks_table_matching_models(tmp_path):
    """The baseline Alembic revision creates the same columns as the ORM model."""
    from alembic import command
    from alembic.config import Config
    from sqlalchemy import create_engine, inspect
    from taskwise.database.models import TaskDB

    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = Config(os.path.join(root, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(root, "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)

    command.upgrade(cfg, "head")

    columns = {c["name"] for c in inspect(create_engine(url)).get_columns("tasks")}
    assert columns == {c.name for c in TaskDB.__table__.columns}
