"""Download a snapshot from a running vdu server."""

from __future__ import annotations

import requests

from ..exceptions import SnapshotFetchError
from ..logging_config import get_logger
from ..snapshot import CONTENT_TYPE, decode
from ..tree import PathTree

logger = get_logger(__name__)

FETCH_TIMEOUT = 30
TREE_ENDPOINT = "/tree"


def fetch_snapshot(base_url: str, timeout: float = FETCH_TIMEOUT) -> PathTree:
    """GET ``<base_url>/tree`` and decode it.

    Raises:
        SnapshotFetchError: On connection failures and non-2xx responses
        CorruptSnapshotError: If the payload does not decode
    """
    url = base_url.rstrip("/") + TREE_ENDPOINT
    logger.debug("fetching snapshot from %s", url)

    try:
        response = requests.get(url, headers={"Accept": CONTENT_TYPE}, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SnapshotFetchError(url, str(e))

    tree = decode(response.content)
    logger.info(
        "path tree; %s nodes %s bytes", f"{tree.total_count():,}", f"{tree.total_size():,}"
    )
    return tree
