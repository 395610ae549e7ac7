import os

from dotenv import load_dotenv

load_dotenv(encoding="utf-8")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _list_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


MANAGER_API_KEY = os.getenv("MANAGER_API_KEY", "")

# monthly points goal shown on dashboards (3500 / 10)
MONTHLY_TARGET_POINTS = _int_env("MONTHLY_TARGET_POINTS", 350)

# 10 points = 1 EUR
POINTS_PER_EURO = _int_env("POINTS_PER_EURO", 10)

SALE_KEYWORDS = [k.lower() for k in _list_env("SALE_KEYWORDS", "sale,πώληση")]

EXTRA_PENALTY_LIMIT = _int_env("EXTRA_PENALTY_LIMIT", 3)
EXTRA_PENALTY_EUROS = _int_env("EXTRA_PENALTY_EUROS", 50)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = _list_env(
    "CORS_ORIGINS",
    "http://localhost:3000,https://localhost:3000,http://127.0.0.1:3000,https://127.0.0.1:3000",
)
