"""Rate limiting middleware for API protection."""
import time
from collections import defaultdict
from typing import Dict, Tuple
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware


class RateLimiter:
    """Simple in-memory rate limiter."""

    def __init__(self, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self.minute_requests: Dict[str, list] = defaultdict(list)
        self.hour_requests: Dict[str, list] = defaultdict(list)
        self._last_prune = 0.0

    def _clean_old_requests(self, requests: list, window: int, now: float) -> list:
        """Remove requests outside the time window."""
        return [t for t in requests if now - t < window]

    def prune(self, now: float) -> None:
        """Forget clients with no requests left in the hour window."""
        self._last_prune = now
        for client_id in list(self.hour_requests):
            if not self._clean_old_requests(self.hour_requests[client_id], 3600, now):
                del self.hour_requests[client_id]
                self.minute_requests.pop(client_id, None)

    def is_allowed(self, client_id: str, now: float = None) -> Tuple[bool, str]:
        """Check if a request is allowed for the client."""
        now = time.time() if now is None else now
        if now - self._last_prune >= 60:
            self.prune(now)

        self.minute_requests[client_id] = self._clean_old_requests(
            self.minute_requests[client_id], 60, now
        )
        self.hour_requests[client_id] = self._clean_old_requests(
            self.hour_requests[client_id], 3600, now
        )

        if len(self.minute_requests[client_id]) >= self.requests_per_minute:
            return False, f"Rate limit exceeded. Max {self.requests_per_minute} requests per minute."

        if len(self.hour_requests[client_id]) >= self.requests_per_hour:
            return False, f"Rate limit exceeded. Max {self.requests_per_hour} requests per hour."

        self.minute_requests[client_id].append(now)
        self.hour_requests[client_id].append(now)

        return True, ""


class RateLimitMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for rate limiting."""

    def __init__(self, app, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        super().__init__(app)
        self.limiter = RateLimiter(requests_per_minute, requests_per_hour)

    async def dispatch(self, request: Request, call_next):
        client_id = request.client.host if request.client else "unknown"

        allowed, message = self.limiter.is_allowed(client_id)
        if not allowed:
            return JSONResponse(status_code=429, content={"error": message})

        return await call_next(request)
