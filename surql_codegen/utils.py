"""Loading table metadata exported by the schema parser.

The parser writes a JSON array of table objects. These helpers fetch that
payload from a file, a URL or a stream and hand back the decoded JSON
together with a description of where it came from.
"""

import json
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class TableLoaderError(Exception):
    """Raised when table metadata cannot be read or decoded."""

    pass


def parse_json_text(text: str, source: str) -> Any:
    """Decode a JSON document, naming ``source`` in the error."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", source, e)
        raise TableLoaderError(f"Invalid JSON in {source}: {e}") from e


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load table metadata from a local file.

    Args:
        file_path: Path to the exported JSON.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        TableLoaderError: If the file cannot be read or holds invalid JSON.
    """
    path = Path(file_path)
    if not path.is_file():
        logger.error("Table metadata file not found: %s", path)
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning("Reading %s although it has no .json extension", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        raise TableLoaderError(f"Error reading file {path}: {e}") from e

    data = parse_json_text(text, f"file {path}")
    logger.info("Loaded table metadata from %s", path)
    return str(path), data


def load_json_from_stream(stream: TextIO, source: str = "<stdin>") -> tuple[str, Any]:
    """Load table metadata from an open text stream such as stdin."""
    data = parse_json_text(stream.read(), source)
    logger.info("Loaded table metadata from %s", source)
    return source, data


def load_json_from_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str, Any]:
    """Fetch table metadata over HTTP(S).

    Raises:
        TableLoaderError: On a malformed URL, a failed request, or a body
            that is not JSON.
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        logger.error("Invalid URL format: %s", url)
        raise TableLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching table metadata from %s (timeout %ss)", url, timeout)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        raise TableLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise TableLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise TableLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        # Subclass of RequestException, must be caught first
        raise TableLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise TableLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    if "json" not in content_type and not parsed.path.endswith(".json"):
        logger.warning("Response from %s has content type %r", url, content_type)

    logger.info("Loaded table metadata from %s", url)
    return url, data


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, Any]:
    """Load table metadata from exactly one of a file or a URL.

    Raises:
        TableLoaderError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If the file doesn't exist.
    """
    if bool(file_path) == bool(url):
        raise TableLoaderError("Exactly one of file_path or url must be provided")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)
