"""Async client for the clinic scheduling API.
The API owns every record; these calls never cache anything.
"""
from __future__ import annotations
import logging
import os
from typing import Any
import httpx
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_BASE_URL = os.getenv("CLINIC_API_BASE_URL", "https://se-backend-5mmf.onrender.com").rstrip("/")
# unset means no timeout at all
_TIMEOUT = float(os.environ["CLINIC_API_TIMEOUT"]) if os.getenv("CLINIC_API_TIMEOUT") else None

_JSON_HEADERS = {"Accept": "application/json"}


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(http2=True, timeout=_TIMEOUT)


async def list_records(collection: str) -> Any:
    """Return the parsed body of ``GET /{collection}``, envelope untouched."""
    async with _client() as client:
        resp = await client.get(f"{_BASE_URL}/{collection}", headers=_JSON_HEADERS)
        resp.raise_for_status()
        return resp.json()


async def create_record(collection: str, payload: dict[str, Any]) -> None:
    async with _client() as client:
        resp = await client.post(f"{_BASE_URL}/{collection}", headers=_JSON_HEADERS, json=payload)
        resp.raise_for_status()
    logger.info("Created %s record", collection)


async def update_record(collection: str, record_id: str, payload: dict[str, Any]) -> None:
    async with _client() as client:
        resp = await client.put(
            f"{_BASE_URL}/{collection}/{record_id}", headers=_JSON_HEADERS, json=payload
        )
        resp.raise_for_status()
    logger.info("Updated %s/%s", collection, record_id)


async def delete_record(collection: str, record_id: str) -> None:
    async with _client() as client:
        resp = await client.delete(f"{_BASE_URL}/{collection}/{record_id}", headers=_JSON_HEADERS)
        resp.raise_for_status()
    logger.info("Deleted %s/%s", collection, record_id)
