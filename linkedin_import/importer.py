"""
One LinkedIn import call, from whatever input the caller has.

Mode is picked from the input shape:

    .zip file          LinkedIn data export (CSV tables)
    .pdf file          profile saved with "Save to PDF"
    .json file         resume JSON exported earlier
    nothing            data left in the hand-off store by the OAuth redirect
    profile URL        the external import service

``LinkedInImporter.run`` always returns an :class:`ImportResult`; failures
inside a mode become ``success=False`` with a message meant for the user.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from .archive import decode_archive, is_linkedin_export
from .assembler import assemble, coerce_content
from .client import ProfileClient
from .document import read_document
from .errors import LinkedInImportError, ProfileFetchError
from .handoff import KeyValueStore, MemoryStore, consume_handoff, decode_handoff
from .models import ImportResult, ResumeContent
from .parser import extract_document

logger = logging.getLogger(__name__)

NO_INPUT_ERROR = (
    "No LinkedIn data found. Upload your LinkedIn data export (ZIP file), "
    'a profile PDF created with "Save to PDF", or enter your LinkedIn profile URL.'
)
UNSUPPORTED_FILE_ERROR = (
    "Unsupported file type. Please upload a LinkedIn data export (.zip), "
    "a LinkedIn profile PDF (.pdf) or a resume JSON export (.json)."
)
INVALID_URL_ERROR = "Invalid LinkedIn URL. Please enter a linkedin.com profile address."
PROFILE_ONLY_WARNING = (
    "Only basic profile information was found in this export. To import work "
    "experience, education and skills, request your data again on LinkedIn and "
    'choose "Download larger data archive".'
)
NO_ARCHIVE_DATA_ERROR = (
    "No recognizable LinkedIn data found in the ZIP file. "
    "Please make sure you're uploading your LinkedIn data export."
)
NO_DOCUMENT_DATA_ERROR = (
    "No recognizable LinkedIn profile data found in the PDF. "
    'Please use the "Save to PDF" option on your LinkedIn profile.'
)
MISSING_SECTIONS_WARNING = "Some sections could not be read from the PDF: {}"
INVALID_JSON_EXPORT_ERROR = (
    "Invalid resume format. The JSON file must contain personalInfo "
    "at the top level or under content."
)
UNREADABLE_JSON_EXPORT_ERROR = "Failed to parse JSON file"
EMPTY_JSON_EXPORT_ERROR = "The JSON file contains no resume data"
NO_URL_DATA_ERROR = "No profile data could be extracted from this LinkedIn URL"

FETCH_ERRORS = (
    (
        ("404", "not found"),
        "LinkedIn profile not found. Please check the URL and make sure the profile is public.",
    ),
    (
        ("403", "forbidden"),
        "Access to this LinkedIn profile is restricted. Make sure the profile is "
        "public, or import your data export instead.",
    ),
    (
        ("401", "unauthorized"),
        "LinkedIn import is not authorized. Please sign in again, or import your "
        "data export instead.",
    ),
    (
        ("network", "timeout", "timed out", "connect"),
        "Network error while contacting LinkedIn. Please check your connection and try again.",
    ),
)
GENERIC_FETCH_ERROR = (
    "Failed to import from LinkedIn. Please try again, or import your data "
    "export or profile PDF instead."
)


def fetch_error_message(message: str) -> str:
    lowered = message.lower()
    for needles, friendly in FETCH_ERRORS:
        if any(needle in lowered for needle in needles):
            return friendly
    return GENERIC_FETCH_ERROR


def finish(content: ResumeContent, warnings: list[str], empty_error: str) -> ImportResult:
    if content.is_empty():
        return ImportResult.fail(empty_error)
    return ImportResult.ok(content, warnings)


class LinkedInImporter:
    def __init__(
        self, store: KeyValueStore | None = None, client: ProfileClient | None = None
    ) -> None:
        self.store = store if store is not None else MemoryStore()
        self.client = client or ProfileClient()

    async def run(
        self,
        file: str | Path | None = None,
        url: str | None = None,
        content: bytes | None = None,
    ) -> ImportResult:
        """Import from ``file`` (read from disk unless ``content`` is given),
        then the hand-off store, then ``url``."""
        try:
            result = await self.dispatch(file, url, content)
        except LinkedInImportError as exc:
            logger.warning("LinkedIn import failed: %s", exc)
            return ImportResult.fail(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error during LinkedIn import")
            return ImportResult.fail(f"Failed to parse LinkedIn data: {exc}")
        if result.success:
            logger.info("LinkedIn import succeeded with %d warning(s)", len(result.warnings or []))
        else:
            logger.warning("LinkedIn import failed: %s", result.error)
        return result

    async def dispatch(
        self, file: str | Path | None, url: str | None, content: bytes | None
    ) -> ImportResult:
        if file is not None:
            path = Path(file)
            suffix = path.suffix.lower()
            if suffix not in (".zip", ".pdf", ".json"):
                return ImportResult.fail(UNSUPPORTED_FILE_ERROR)
            data = content if content is not None else await read_file(path)
            if suffix == ".zip":
                return await self.import_archive(data, path.name)
            if suffix == ".pdf":
                return await self.import_document(data)
            return self.import_json_export(data)

        payload = consume_handoff(self.store)
        if payload is not None:
            logger.info("Importing from LinkedIn hand-off data")
            return ImportResult.ok(decode_handoff(payload))

        if url and url.strip():
            return await self.import_url(url)

        logger.info("No file, hand-off data or URL to import from")
        return ImportResult.fail(NO_INPUT_ERROR)

    async def import_archive(self, data: bytes, name: str) -> ImportResult:
        logger.info("Importing LinkedIn data export %s", name)
        if not is_linkedin_export(name):
            logger.info("%s is not named like a LinkedIn export, decoding anyway", name)
        aggregate = await asyncio.to_thread(decode_archive, data)
        if not aggregate.has_primary_data:
            return ImportResult.fail(NO_ARCHIVE_DATA_ERROR)
        content, warnings = assemble(aggregate)
        if aggregate.is_profile_only:
            warnings.insert(0, PROFILE_ONLY_WARNING)
        return finish(content, warnings, NO_ARCHIVE_DATA_ERROR)

    async def import_document(self, data: bytes) -> ImportResult:
        logger.info("Importing LinkedIn profile PDF (%d bytes)", len(data))
        text = await read_document(data)
        aggregate = await asyncio.to_thread(extract_document, text)
        if not aggregate.has_primary_data:
            return ImportResult.fail(NO_DOCUMENT_DATA_ERROR)
        content, warnings = assemble(aggregate, document_links=True)
        missing = [
            section
            for section, present in (
                ("education", aggregate.has_education),
                ("skills", aggregate.has_skills),
            )
            if not present
        ]
        if missing:
            warnings.append(MISSING_SECTIONS_WARNING.format(", ".join(missing)))
        return finish(content, warnings, NO_DOCUMENT_DATA_ERROR)

    def import_json_export(self, data: bytes) -> ImportResult:
        logger.info("Importing resume JSON export")
        try:
            payload: Any = json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise LinkedInImportError(UNREADABLE_JSON_EXPORT_ERROR) from exc
        if not has_personal_info(payload):
            return ImportResult.fail(INVALID_JSON_EXPORT_ERROR)
        return finish(coerce_content(payload), [], EMPTY_JSON_EXPORT_ERROR)

    async def import_url(self, url: str) -> ImportResult:
        profile_url = url.strip().rstrip("/")
        if "linkedin.com" not in profile_url.lower():
            return ImportResult.fail(INVALID_URL_ERROR)
        logger.info("Importing from LinkedIn URL %s", profile_url)
        try:
            payload = await self.client.fetch_profile(profile_url)
        except ProfileFetchError as exc:
            logger.warning("Profile fetch failed: %s", exc)
            return ImportResult.fail(fetch_error_message(str(exc)))
        return finish(coerce_content(payload), [], NO_URL_DATA_ERROR)


def has_personal_info(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    if payload.get("personalInfo"):
        return True
    nested = payload.get("content")
    return isinstance(nested, dict) and bool(nested.get("personalInfo"))


async def read_file(path: Path) -> bytes:
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise LinkedInImportError(f"Could not read {path.name}: {exc.strerror or exc}") from exc


async def import_linkedin(
    file: str | Path | None = None,
    url: str | None = None,
    content: bytes | None = None,
    store: KeyValueStore | None = None,
    client: ProfileClient | None = None,
) -> ImportResult:
    importer = LinkedInImporter(store=store, client=client)
    return await importer.run(file=file, url=url, content=content)
