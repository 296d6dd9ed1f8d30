from pydantic import BaseModel
from typing import Any, Optional


class PinRequest(BaseModel):
    # Left untyped so verify can answer malformed PINs with valid=False
    pin: Any = None


class AuthStatusResponse(BaseModel):
    isSetup: bool


class SessionStatusResponse(BaseModel):
    valid: bool
    expiresAt: Optional[int] = None


class VerifyResponse(BaseModel):
    valid: bool
    sessionToken: Optional[str] = None
    expiresAt: Optional[int] = None
