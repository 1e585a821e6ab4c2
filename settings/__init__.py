"""Application settings."""

import os
from pathlib import Path

# Database (a connection string selects PostgreSQL, otherwise the embedded DuckDB file)
DATABASE_URL = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL") or None
DB_PATH = os.getenv("SURVEY_DB_PATH", "data/survey.duckdb")

# PostgreSQL pool
PG_POOL_MIN = int(os.getenv("SURVEY_PG_POOL_MIN", "1"))
PG_POOL_MAX = int(os.getenv("SURVEY_PG_POOL_MAX", "10"))
PG_CONNECT_TIMEOUT = float(os.getenv("SURVEY_PG_CONNECT_TIMEOUT", "10"))

# Admin
ADMIN_TOKEN = os.getenv("SURVEY_ADMIN_TOKEN") or None

# Surveys
TOKEN_LENGTH = 6

# Logging
LOG_DIR = Path(os.getenv("SURVEY_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("SURVEY_LOG_LEVEL", "INFO")
