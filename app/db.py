import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv
import urllib.parse

# Load .env file with explicit UTF-8 encoding
load_dotenv(encoding='utf-8')


def normalize_database_url(url: str) -> str:
    # urlunparse collapses sqlite:////abs/path into sqlite://abs/path
    if url.startswith("sqlite"):
        return url

    # Ensure proper encoding by parsing and reconstructing the URL
    try:
        parsed = urllib.parse.urlparse(url)
        return urllib.parse.urlunparse(parsed)
    except ValueError:
        return url.encode('utf-8', errors='replace').decode('utf-8')


def engine_connect_args(url: str) -> dict:
    if url.startswith("postgres"):
        return {"options": "-c timezone=utc"}
    if url.startswith("sqlite"):
        # request handlers run in a threadpool
        return {"check_same_thread": False}
    return {}


DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set")

DATABASE_URL = normalize_database_url(DATABASE_URL)

engine = create_engine(DATABASE_URL, connect_args=engine_connect_args(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
