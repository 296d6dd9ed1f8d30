"""Best-effort detection of shop links stored in a part's model field."""
import re
from typing import Optional
from urllib.parse import urlsplit

URL_PATTERN = re.compile(r"^(https?://)?([\w-]+\.)+\w{2,}(/.*)?$", re.IGNORECASE)


def looks_like_url(text: Optional[str]) -> bool:
    if not text:
        return False
    return URL_PATTERN.match(text.strip()) is not None


def model_url(text: Optional[str]) -> Optional[str]:
    """Return a clickable URL for ``text`` or None when it is a plain part number."""
    if not looks_like_url(text):
        return None
    text = text.strip()
    return text if text.lower().startswith("http") else f"https://{text}"


def model_domain(text: Optional[str]) -> Optional[str]:
    url = model_url(text)
    if url is None:
        return None
    host = urlsplit(url).hostname or text
    return re.sub(r"^www\.", "", host)
