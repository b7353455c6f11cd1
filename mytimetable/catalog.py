"""
Lecture catalog source.

The catalog comes in two partitions (majors, liberal arts), each a JSON list
of lecture records. It only counts as loaded once BOTH partitions are in;
the result is always majors first, then liberal arts.

- fetch_catalog: over HTTP with requests; errors propagate to the caller
- load_catalog_dir: from local JSON files; a missing/broken file is an empty partition
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urljoin

import requests

from mytimetable.config import DEFAULT_DATA_DIR, PARTITIONS, REQUEST_TIMEOUT
from mytimetable.model import Lecture

logger = logging.getLogger(__name__)


def lectures_from_json(data: Any) -> list[Lecture]:
    """
    Convert a decoded JSON partition into Lecture objects. Non-dict items are skipped.
    """
    if not isinstance(data, list):
        return []
    return [Lecture.from_dict(item) for item in data if isinstance(item, dict)]


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def _fetch_partition(session: requests.Session, base_url: str, name: str, timeout: float) -> list[Lecture]:
    url = urljoin(base_url.rstrip("/") + "/", name)
    logger.debug("GET %s", url)
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return lectures_from_json(resp.json())


def fetch_catalog(
    base_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> list[Lecture]:
    """
    Fetch both partitions and concatenate them in PARTITIONS order.

    Raises requests.RequestException (or ValueError for a non-JSON body)
    if either partition fails; there is no partial catalog.
    """
    own_session = session is None
    http = session or requests.Session()
    try:
        lectures: list[Lecture] = []
        for name in PARTITIONS:
            lectures.extend(_fetch_partition(http, base_url, name, timeout))
    finally:
        if own_session:
            http.close()

    logger.info("catalog loaded: %d lectures", len(lectures))
    return lectures


# ---------------------------------------------------------------------------
# Local files
# ---------------------------------------------------------------------------


def _load_json(path: Path) -> Any:
    """
    Load JSON from a file, [] if it is missing or broken.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("catalog partition missing: %s", path)
        return []
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("catalog partition unreadable: %s (%s)", path, exc)
        return []


def load_catalog_dir(path: str | Path | None = None) -> list[Lecture]:
    data_dir = Path(path) if path is not None else DEFAULT_DATA_DIR
    lectures: list[Lecture] = []
    for name in PARTITIONS:
        lectures.extend(lectures_from_json(_load_json(data_dir / name)))
    return lectures
