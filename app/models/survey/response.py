"""Response (one participant's ranked ballot) model."""

RESPONSE_DDL = [
    "CREATE SEQUENCE IF NOT EXISTS responses_id_seq",
    """
    CREATE TABLE IF NOT EXISTS responses (
        id INTEGER PRIMARY KEY DEFAULT nextval('responses_id_seq'),
        survey_token VARCHAR NOT NULL,
        pseudonym VARCHAR NOT NULL,
        votes VARCHAR NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT current_timestamp,
        FOREIGN KEY (survey_token) REFERENCES surveys(token),
        UNIQUE (survey_token, pseudonym)
    )
    """,
]

RESPONSE_DDL_POSTGRES = [
    """
    CREATE TABLE IF NOT EXISTS responses (
        id SERIAL PRIMARY KEY,
        survey_token TEXT NOT NULL,
        pseudonym TEXT NOT NULL,
        votes TEXT NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (survey_token) REFERENCES surveys(token),
        CONSTRAINT unique_response UNIQUE (survey_token, pseudonym)
    )
    """,
]
