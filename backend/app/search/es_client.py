"""Elasticsearch client singleton for the question indices."""

import logging
from typing import TYPE_CHECKING

from elasticsearch import Elasticsearch
from elasticsearch import exceptions as es_exceptions

from app.core.config import settings

if TYPE_CHECKING:
    from elasticsearch import Elasticsearch as ESClient

logger = logging.getLogger(__name__)

# Singleton client instance
_es_client: "ESClient | None" = None


def get_es_client() -> "ESClient | None":
    """
    Get Elasticsearch client singleton.

    Returns None if Elasticsearch is disabled. The client is built lazily and
    not pinged here; reachability is tracked by the backend health checker.
    """
    global _es_client

    if not settings.ELASTICSEARCH_ENABLED:
        return None

    if _es_client is not None:
        return _es_client

    basic_auth = None
    if settings.ELASTICSEARCH_USERNAME and settings.ELASTICSEARCH_PASSWORD:
        basic_auth = (settings.ELASTICSEARCH_USERNAME, settings.ELASTICSEARCH_PASSWORD)

    try:
        _es_client = Elasticsearch(
            settings.ELASTICSEARCH_URL,
            basic_auth=basic_auth,
            request_timeout=settings.ELASTICSEARCH_REQUEST_TIMEOUT_MS / 1000.0,  # Convert ms to seconds
            max_retries=settings.ELASTICSEARCH_RETRY_MAX,
            retry_on_timeout=True,
        )
    except ValueError as e:
        logger.warning(f"Failed to initialize Elasticsearch client: {e}")
        _es_client = None
    return _es_client


def ping() -> bool:
    """
    Ping Elasticsearch to check connectivity.

    Returns False if disabled, unavailable, or ping fails. Never raises.
    """
    client = get_es_client()
    if client is None:
        return False

    try:
        return bool(client.ping())
    except (es_exceptions.ConnectionError, es_exceptions.TransportError, es_exceptions.ApiError) as e:
        logger.debug(f"Elasticsearch ping failed: {e}")
        return False


def reset_client() -> None:
    """Reset the singleton client (useful for testing)."""
    global _es_client
    _es_client = None
