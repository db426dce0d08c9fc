# prompt_portal/core/security.py
import hashlib
import hmac
import secrets

from prompt_portal.core.config import Config

HASH_ALGORITHM = "pbkdf2_sha256"


class PasswordHasher:
    """Salted PBKDF2-SHA256 password hashing.

    Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>`` so the
    work factor can be raised later without invalidating existing records.
    """

    def __init__(self, iterations: int = None):
        self.iterations = iterations or Config.PASSWORD_HASH_ITERATIONS

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256", password.encode(), salt.encode(), iterations
        ).hex()

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(16)
        digest = self._derive(password, salt, self.iterations)
        return f"{HASH_ALGORITHM}${self.iterations}${salt}${digest}"

    def verify(self, password: str, encoded: str) -> bool:
        try:
            algorithm, iterations, salt, digest = encoded.split("$", 3)
            iterations = int(iterations)
        except (AttributeError, ValueError):
            return False
        if algorithm != HASH_ALGORITHM:
            return False
        candidate = self._derive(password, salt, iterations)
        return hmac.compare_digest(candidate, digest)


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


def hash_session_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
