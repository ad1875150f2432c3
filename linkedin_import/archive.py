from __future__ import annotations

import csv
import io
import logging
import posixpath
import zipfile
from typing import Callable, Iterator, TypeVar

from .errors import ArchiveError
from .models import (
    ParsedAggregate,
    RawCertificationRecord,
    RawEducationRecord,
    RawEmailRecord,
    RawLanguageRecord,
    RawPositionRecord,
    RawProfileRecord,
    RawSkillRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROFILE_TABLE = "Profile"
POSITIONS_TABLE = "Positions"
EDUCATION_TABLE = "Education"
SKILLS_TABLE = "Skills"
CERTIFICATIONS_TABLE = "Certifications"
LANGUAGES_TABLE = "Languages"
EMAILS_TABLE = "Email Addresses"

EXPORT_NAME_PATTERNS = (
    "linkedin",
    "complete_",
    "data_export",
    "dataexport",
    "basic_linkedin",
)


def is_linkedin_export(filename: str) -> bool:
    lowered = filename.lower()
    if not lowered.endswith(".zip"):
        return False
    return any(pattern in lowered for pattern in EXPORT_NAME_PATTERNS)


def open_archive(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as exc:
        raise ArchiveError("The file doesn't appear to be a valid ZIP file") from exc


def find_table(names: list[str], table: str) -> str | None:
    wanted = table.lower()
    candidates = [
        name
        for name in names
        if name.lower().endswith(".csv")
        and wanted in posixpath.basename(name).lower()
    ]
    if not candidates:
        return None
    for name in candidates:
        if posixpath.basename(name).lower() == f"{wanted}.csv":
            return name
    return candidates[0]


def read_table(archive: zipfile.ZipFile, table: str) -> str | None:
    member = find_table(archive.namelist(), table)
    if member is None:
        logger.debug("Table %s not present in archive", table)
        return None
    try:
        raw = archive.read(member)
    except (zipfile.BadZipFile, OSError, RuntimeError) as exc:
        logger.warning("Could not read %s from archive: %s", member, exc)
        return None
    logger.debug("Reading %s (%d bytes) for table %s", member, len(raw), table)
    return raw.decode("utf-8-sig", errors="replace")


def iter_rows(content: str, table: str = "") -> Iterator[dict]:
    reader = csv.DictReader(io.StringIO(content, newline=""))
    try:
        fieldnames = reader.fieldnames
    except csv.Error as exc:
        logger.warning("Unreadable header in %s: %s", table or "table", exc)
        return
    if fieldnames:
        reader.fieldnames = [name.strip() for name in fieldnames]
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            logger.warning("Skipping malformed row in %s: %s", table or "table", exc)
            continue
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        yield row


def decode_rows(content: str, table: str, factory: Callable[[dict], T]) -> list[T]:
    records: list[T] = []
    for index, row in enumerate(iter_rows(content, table), start=1):
        try:
            records.append(factory(row))
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Skipping row %d of %s: %s", index, table, exc)
    logger.debug("Decoded %d rows from %s", len(records), table)
    return records


def decode_archive(data: bytes) -> ParsedAggregate:
    with open_archive(data) as archive:
        aggregate = ParsedAggregate()

        content = read_table(archive, PROFILE_TABLE)
        if content is not None:
            profiles = decode_rows(content, PROFILE_TABLE, RawProfileRecord.from_row)
            aggregate.profile = profiles[0] if profiles else None

        tables = (
            ("positions", POSITIONS_TABLE, RawPositionRecord.from_row),
            ("education", EDUCATION_TABLE, RawEducationRecord.from_row),
            ("skills", SKILLS_TABLE, RawSkillRecord.from_row),
            ("certifications", CERTIFICATIONS_TABLE, RawCertificationRecord.from_row),
            ("languages", LANGUAGES_TABLE, RawLanguageRecord.from_row),
            ("emails", EMAILS_TABLE, RawEmailRecord.from_row),
        )
        for attribute, table, factory in tables:
            content = read_table(archive, table)
            if content is not None:
                setattr(aggregate, attribute, decode_rows(content, table, factory))

    logger.info("Decoded LinkedIn archive: %s", aggregate.summary())
    return aggregate
