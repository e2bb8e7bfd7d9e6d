from docflow.config import Settings
from docflow.db.session import normalize_url


def test_settings_default_to_local_sqlite(monkeypatch):
    for name in ("DATABASE_URL", "SECRET_KEY", "ACCESS_TOKEN_EXPIRE_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    cfg = Settings(_env_file=None)

    assert cfg.database_url == "sqlite:///./docflow.db"
    assert cfg.access_token_expire_seconds == 7200
    assert cfg.secret_key


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db/docs")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_SECONDS", "60")

    cfg = Settings(_env_file=None)

    assert normalize_url(cfg.database_url) == "postgresql+psycopg://u:p@db/docs"
    assert cfg.access_token_expire_seconds == 60
