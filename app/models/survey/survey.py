"""Survey model."""

SURVEY_DDL = [
    "CREATE SEQUENCE IF NOT EXISTS surveys_id_seq",
    """
    CREATE TABLE IF NOT EXISTS surveys (
        id INTEGER PRIMARY KEY DEFAULT nextval('surveys_id_seq'),
        token VARCHAR NOT NULL UNIQUE,
        title VARCHAR NOT NULL,
        choices VARCHAR NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT current_timestamp
    )
    """,
]

SURVEY_DDL_POSTGRES = [
    """
    CREATE TABLE IF NOT EXISTS surveys (
        id SERIAL PRIMARY KEY,
        token TEXT NOT NULL UNIQUE,
        title TEXT NOT NULL,
        choices TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]

SURVEY_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_surveys_created ON surveys(created_at)",
]
