# tests/test_config.py
from ticketdesk.core.config import Settings
from ticketdesk.store.file_store import FileStore
from ticketdesk.store.provider import build_store
from ticketdesk.store.sql_store import SqlStore


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.PORT == 3000
    assert settings.STORE_BACKEND == "file"
    assert settings.ADMIN_DEFAULT_PASSWORD == "admin123"
    assert settings.DEFAULT_GROUPS == ["Alle", "Support", "Entwicklung", "Design"]
    assert settings.cors_origins == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8081")
    monkeypatch.setenv("STORE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_SSL_VERIFY", "false")
    monkeypatch.setenv("DEFAULT_GROUPS", '["Entwicklung", "Design"]')
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, https://tickets.example.com")

    settings = Settings(_env_file=None)
    assert settings.PORT == 8081
    assert settings.STORE_BACKEND == "sql"
    assert settings.DATABASE_SSL_VERIFY is False
    assert settings.DEFAULT_GROUPS == ["Entwicklung", "Design"]
    assert settings.cors_origins == ["http://localhost:5173", "https://tickets.example.com"]


def test_build_store_picks_backend(tmp_path):
    file_settings = Settings(_env_file=None, DATA_FILE=str(tmp_path / "d.json"))
    assert isinstance(build_store(file_settings), FileStore)

    sql_settings = Settings(
        _env_file=None,
        STORE_BACKEND="sql",
        DATABASE_URL=f"sqlite:///{tmp_path / 't.db'}",
    )
    store = build_store(sql_settings)
    assert isinstance(store, SqlStore)
    store.close()


def test_configure_logging_installs_one_handler():
    import logging

    from ticketdesk.core.logging import configure_logging

    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_logging("debug")
        configure_logging("WARNING")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.WARNING
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)
