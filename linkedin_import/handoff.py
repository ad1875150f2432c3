"""
One-shot pickup of data left behind by the LinkedIn OAuth redirect.

The redirect page stores the imported JSON plus a "completed" marker in a
string key/value store (session storage in the browser). The importer takes
both out exactly once; whoever reads second finds nothing.
"""

from __future__ import annotations

import json
import logging
from typing import Protocol

from .assembler import coerce_content
from .errors import HandoffError
from .models import ResumeContent

logger = logging.getLogger(__name__)

IMPORT_DATA_KEY = "linkedin_import_data"
IMPORT_STATUS_KEY = "linkedin_import_status"
OAUTH_STATE_KEY = "linkedin_oauth_state"
COMPLETED = "completed"

EMPTY_HANDOFF_ERROR = "LinkedIn import data appears empty"
INVALID_HANDOFF_ERROR = "Failed to read LinkedIn import data"

EMPTY_PAYLOADS = {"", "{}", "[]", "null"}


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store for tests and the command line."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def store_handoff(store: KeyValueStore, payload: str, state: str | None = None) -> None:
    store.set(IMPORT_DATA_KEY, payload)
    store.set(IMPORT_STATUS_KEY, COMPLETED)
    if state is not None:
        store.set(OAUTH_STATE_KEY, state)


def consume_handoff(store: KeyValueStore) -> str | None:
    # No await between read and delete: one caller gets the payload.
    payload = store.get(IMPORT_DATA_KEY)
    status = store.get(IMPORT_STATUS_KEY)
    if payload is None or status != COMPLETED:
        if payload is not None:
            logger.debug("Hand-off payload present but status is %r", status)
        return None
    for key in (IMPORT_DATA_KEY, IMPORT_STATUS_KEY, OAUTH_STATE_KEY):
        store.delete(key)
    logger.info("Consumed LinkedIn hand-off payload (%d chars)", len(payload))
    return payload


def decode_handoff(payload: str) -> ResumeContent:
    if payload.strip() in EMPTY_PAYLOADS:
        raise HandoffError(EMPTY_HANDOFF_ERROR)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise HandoffError(INVALID_HANDOFF_ERROR) from exc
    content = coerce_content(data)
    if content.is_empty():
        raise HandoffError(EMPTY_HANDOFF_ERROR)
    return content
