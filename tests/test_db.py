from pathlib import Path

from sqlalchemy import create_engine, text

from app.db import DATABASE_URL, engine, engine_connect_args, normalize_database_url


def test_absolute_sqlite_path_is_kept(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'incentive.db'}"
    assert url.startswith("sqlite:////")

    assert normalize_database_url(url) == url

    other = create_engine(normalize_database_url(url), connect_args=engine_connect_args(url))
    with other.connect() as conn:
        assert conn.execute(text("select 1")).scalar() == 1
    other.dispose()
    assert (tmp_path / "incentive.db").exists()


def test_relative_sqlite_path_is_kept():
    assert normalize_database_url("sqlite:///rel.db") == "sqlite:///rel.db"


def test_postgres_url_round_trips():
    url = "postgresql+psycopg2://user:pw@localhost:5432/incentives"
    assert normalize_database_url(url) == url
    assert engine_connect_args(url) == {"options": "-c timezone=utc"}


def test_app_engine_uses_the_configured_sqlite_file():
    assert DATABASE_URL.startswith("sqlite:////")
    assert engine.url.database.endswith("test.db")
    with engine.connect() as conn:
        assert conn.execute(text("select 1")).scalar() == 1
