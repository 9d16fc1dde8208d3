"""Reading the vocabulary source from a file or a URL."""

from pathlib import Path

import httpx

from config import settings
from errors import VocabError
from log import get_logger

logger = get_logger(__name__)


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_text(url: str) -> str:
    """Fetch a remote source."""
    headers = {"User-Agent": settings.user_agent}
    try:
        response = httpx.get(url, timeout=settings.http_timeout, follow_redirects=True, headers=headers)
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as e:
        raise VocabError(f"HTTP error {e.response.status_code} fetching {url}") from e
    except httpx.TimeoutException as e:
        raise VocabError(f"Timeout fetching {url}") from e
    except httpx.HTTPError as e:
        raise VocabError(f"Error fetching {url}: {e}") from e


def read_source(location: str) -> str:
    """Return the text of the source; reading is done once, before the conversion."""
    if is_remote(location):
        text = fetch_text(location)
    else:
        try:
            text = Path(location).read_text(encoding="utf-8")
        except OSError as e:
            raise VocabError(f"Cannot read {location}: {e.strerror}") from e
    logger.debug("source read", location=location, size=len(text))
    return text
