"""
core/crypto.py — Password & Session Crypto
============================================
Central place for ALL hashing and token operations.
Every module imports from here — never roll your own crypto elsewhere.

Provides:
- Salted PBKDF2-SHA256 password hashing and verification
- JWT session token creation / verification
"""

import base64
import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from config import settings

logger = logging.getLogger("panchayat.crypto")

PASSWORD_SCHEME = "pbkdf2_sha256"
DEFAULT_SECRET = "change-me-in-production"


class CryptoEngine:
    """
    Singleton crypto engine — used across all modules via:
        from core.crypto import crypto_engine
    """

    def __init__(self, secret_key: str = None, algorithm: str = None, iterations: int = None):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._iterations = iterations

    @property
    def secret_key(self) -> str:
        return self._secret_key or settings.JWT_SECRET_KEY

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.JWT_ALGORITHM

    @property
    def iterations(self) -> int:
        return self._iterations or settings.PASSWORD_HASH_ITERATIONS

    def is_ready(self) -> str:
        if self.secret_key == DEFAULT_SECRET:
            return "insecure default secret"
        return "ok"

    # ── Passwords ──────────────────────────────────────────────────────────
    def _derive(self, password: str, salt: str, iterations: int) -> str:
        key = hashlib.pbkdf2_hmac(
            hash_name="sha256",
            password=password.encode(),
            salt=salt.encode(),
            iterations=iterations,
        )
        return base64.b64encode(key).decode()

    def hash_password(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.
        Stored form: pbkdf2_sha256$<iterations>$<salt>$<hash>
        """
        salt = secrets.token_hex(16)
        digest = self._derive(password, salt, self.iterations)
        return f"{PASSWORD_SCHEME}${self.iterations}${salt}${digest}"

    def verify_password(self, password: str, stored: str) -> bool:
        """Verify a password against its stored hash (constant-time compare)."""
        try:
            scheme, iterations, salt, digest = stored.split("$", 3)
            iterations = int(iterations)
        except (AttributeError, ValueError):
            logger.warning("Stored password is not in a recognised hash format")
            return False
        if scheme != PASSWORD_SCHEME:
            return False
        computed = self._derive(password, salt, iterations)
        return hmac.compare_digest(computed, digest)

    # ── JWT Tokens ─────────────────────────────────────────────────────────
    def create_access_token(self, subject: str, extra_data: dict = None) -> str:
        """
        Create a signed session token.
        subject = citizen_id of the signed-in user.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "exp": now + timedelta(minutes=settings.JWT_EXPIRY_MINUTES),
            "iat": now,
        }
        if extra_data:
            payload.update(extra_data)
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict:
        """Verify and decode a JWT. Raises JWTError if invalid/expired."""
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

    def token_subject(self, token: str) -> Optional[str]:
        """Return the token's subject, or None when the token does not verify."""
        try:
            return self.verify_token(token).get("sub")
        except JWTError as e:
            logger.warning(f"Rejected session token: {e}")
            return None


# Singleton instance — import this everywhere
crypto_engine = CryptoEngine()
