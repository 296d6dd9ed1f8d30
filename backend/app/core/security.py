"""Security utilities for PIN hashing and session tokens."""
import re
import secrets

from passlib.context import CryptContext

from app.core.config import settings

PIN_PATTERN = re.compile(r"^[0-9]{4}$")

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PIN_HASH_ROUNDS,
)


def is_valid_pin(pin) -> bool:
    return isinstance(pin, str) and PIN_PATTERN.match(pin) is not None


def hash_pin(pin: str) -> str:
    return pwd_context.hash(pin)


def verify_pin(plain_pin: str, pin_hash: str) -> bool:
    # passlib compares digests in constant time
    return pwd_context.verify(plain_pin, pin_hash)


def generate_session_token() -> str:
    return secrets.token_hex(32)
