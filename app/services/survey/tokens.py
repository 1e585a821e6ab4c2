"""Survey token generator."""

import secrets
import string

TOKEN_ALPHABET = string.ascii_uppercase + string.digits


class TokenGenerator:
    """Draws short random tokens. Stateless; uniqueness is the caller's job."""

    def __init__(self, length: int = 6, alphabet: str = TOKEN_ALPHABET):
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
