def test_get_engine_kwargs_sqlite_has_check_same_thread():
    from taskboard.database import database as db

    kwargs = db.get_engine_kwargs("sqlite:///./taskboard.db")
    assert "connect_args" in kwargs
    assert kwargs["connect_args"]["check_same_thread"] is False
    # SQLite should not require pool sizing knobs.
    assert "pool_size" not in kwargs
    assert "max_overflow" not in kwargs
    assert kwargs["pool_pre_ping"] is True


def test_get_engine_kwargs_postgres_reads_pool_env(monkeypatch):
    from taskboard.database import database as db

    monkeypatch.setenv("DB_POOL_SIZE", "7")
    monkeypatch.setenv("DB_MAX_OVERFLOW", "3")
    monkeypatch.setenv("DB_POOL_TIMEOUT_SEC", "15")

    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert "connect_args" not in kwargs
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["pool_size"] == 7
    assert kwargs["max_overflow"] == 3
    assert kwargs["pool_timeout"] == 15


def test_debug_enables_echo(monkeypatch):
    from taskboard.database import database as db

    monkeypatch.setenv("DEBUG", "true")
    assert db.get_engine_kwargs("sqlite://")["echo"] is True
    monkeypatch.setenv("DEBUG", "false")
    assert db.get_engine_kwargs("sqlite://")["echo"] is False


def test_sqlite_url_detection():
    from taskboard.database import database as db

    assert db._is_sqlite_url("sqlite:///./taskboard.db") is True
    assert db._is_sqlite_url("postgresql+psycopg://u:p@localhost/db") is False


def test_init_db_creates_tasks_table(monkeypatch, tmp_path):
    from sqlalchemy import inspect
    from taskboard.database import database as db

    url = f"sqlite:///{tmp_path / 'init.db'}"
    engine = db.build_engine(url)
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setenv("RUN_MIGRATIONS", "false")

    db.init_db()

    assert "tasks" in inspect(engine).get_table_names()
