"""Tests for reading LinkedIn data export archives."""

from __future__ import annotations

import io
import logging
import zipfile

import pytest

from linkedin_import.archive import decode_archive, decode_rows, find_table, is_linkedin_export
from linkedin_import.errors import ArchiveError

PROFILE_CSV = (
    "First Name,Last Name,Maiden Name,Address,Birth Date,Headline,Summary,Industry,"
    "Zip Code,Geo Location,Twitter Handles,Websites,Instant Messengers\n"
    'Ada,Lovelace,,,,Analytical Engineer,"Writes programs.",Computing,,"London, UK",'
    '[adal],"[PORTFOLIO:https://ada.dev,COMPANY:https://github.com/ada]",\n'
)

POSITIONS_CSV = (
    "Company Name,Title,Description,Location,Started On,Finished On\n"
    'Engines Ltd,Programmer,"Built the first loop.\n- Notes on the engine",London,Jan 1842,\n'
    "Royal Society,Assistant,,London,1840,Dec 1841\n"
)


def make_archive(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def test_is_linkedin_export() -> None:
    assert is_linkedin_export("Basic_LinkedInDataExport_01-01-2024.zip")
    assert is_linkedin_export("Complete_2024.ZIP")
    assert not is_linkedin_export("holiday-photos.zip")
    assert not is_linkedin_export("linkedin.pdf")


def test_find_table_prefers_exact_name() -> None:
    names = ["export/Profile Summary.csv", "export/Profile.csv", "export/Positions.csv"]
    assert find_table(names, "Profile") == "export/Profile.csv"
    assert find_table(names, "positions") == "export/Positions.csv"
    assert find_table(names, "Skills") is None


def test_decode_full_archive() -> None:
    data = make_archive(
        {
            "Profile.csv": PROFILE_CSV,
            "Positions.csv": POSITIONS_CSV,
            "Skills.csv": "Name\nPython\n\nLeadership\n",
            "Email Addresses.csv": "Email Address,Confirmed,Primary,Updated On\nada@example.com,Yes,Yes,\n",
        }
    )
    aggregate = decode_archive(data)
    assert aggregate.profile is not None
    assert aggregate.profile.first_name == "Ada"
    assert aggregate.profile.geo_location == "London, UK"
    assert [p.company for p in aggregate.positions] == ["Engines Ltd", "Royal Society"]
    assert aggregate.positions[0].description.startswith("Built the first loop.")
    assert [s.name for s in aggregate.skills] == ["Python", "Leadership"]
    assert aggregate.emails[0].preferred
    assert aggregate.education is None
    assert not aggregate.is_profile_only


def test_decode_reads_bom_and_padded_headers() -> None:
    data = make_archive({"Skills.csv": "\ufeff Name \nRust\n"})
    aggregate = decode_archive(data)
    assert [s.name for s in aggregate.skills] == ["Rust"]


def test_profile_only_archive() -> None:
    aggregate = decode_archive(make_archive({"Profile.csv": PROFILE_CSV}))
    assert aggregate.has_profile
    assert aggregate.is_profile_only
    assert aggregate.positions is None


def test_archive_without_known_tables() -> None:
    aggregate = decode_archive(make_archive({"Connections.csv": "First Name\nBob\n", "notes.txt": "hi"}))
    assert not aggregate.has_primary_data


def test_invalid_archive_raises() -> None:
    with pytest.raises(ArchiveError):
        decode_archive(b"definitely not a zip")


def test_oversized_row_is_skipped(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="linkedin_import.archive")
    content = "Name\nPython\n" + "x" * 200_000 + "\nRust\n"
    aggregate = decode_archive(make_archive({"Skills.csv": content}))
    assert [s.name for s in aggregate.skills] == ["Python", "Rust"]
    assert any(
        record.levelno == logging.WARNING and "Skills" in record.getMessage()
        for record in caplog.records
    )


def test_row_rejected_by_factory_is_skipped(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="linkedin_import.archive")

    def factory(row: dict) -> str:
        if row["Name"] == "broken":
            raise ValueError("unusable row")
        return row["Name"]

    names = decode_rows("Name\nPython\nbroken\nRust\n", "Skills", factory)
    assert names == ["Python", "Rust"]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "row 2 of Skills" in warnings[0].getMessage()
