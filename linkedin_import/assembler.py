"""
Raw LinkedIn records -> canonical resume content.

Both decoders hand over a :class:`ParsedAggregate`; everything that turns
loose LinkedIn strings into the resume schema (dates, bullets, skill
buckets, typed links) happens here. Already-canonical payloads from the
OAuth hand-off, the URL service or a JSON export go through
:func:`coerce_content` instead.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable
from urllib.parse import urlsplit

from .models import (
    Certification,
    Education,
    Experience,
    Link,
    ParsedAggregate,
    PersonalInfo,
    RawEmailRecord,
    RawLanguageRecord,
    ResumeContent,
    Skills,
    new_id,
)
from .normalize import categorize_skills, normalize_date, split_description

logger = logging.getLogger(__name__)

NO_NAME_WARNING = "No name found in LinkedIn data"
NO_EXPERIENCE_WARNING = "No work experience found in LinkedIn data"

LINK_DOMAINS = (
    ("linkedin.com", "linkedin", "LinkedIn"),
    ("github.com", "github", "GitHub"),
    ("gitlab.com", "gitlab", "GitLab"),
    ("twitter.com", "twitter", "Twitter"),
    ("x.com", "twitter", "Twitter"),
    ("dribbble.com", "dribbble", "Dribbble"),
    ("behance.net", "behance", "Behance"),
    ("codepen.io", "codepen", "CodePen"),
    ("figma.com", "figma", "Figma"),
    ("youtube.com", "youtube", "YouTube"),
    ("instagram.com", "instagram", "Instagram"),
    ("facebook.com", "facebook", "Facebook"),
    ("twitch.tv", "twitch", "Twitch"),
    ("medium.com", "medium", "Medium"),
    ("stackoverflow.com", "stackoverflow", "Stack Overflow"),
)
DOCUMENT_LINK_TYPES = {"linkedin", "github"}

# "PORTFOLIO:https://..." but not the "https:" of a bare URL
WEBSITE_LABEL_RE = re.compile(r"^(?P<label>[A-Za-z][A-Za-z _-]*):(?!//)\s*")
LIST_SPLIT_RE = re.compile(r"[,\n]")

PROFICIENCY_LEVELS = (
    ("native", 5),
    ("bilingual", 5),
    ("full professional", 5),
    ("professional working", 4),
    ("limited", 3),
    ("elementary", 2),
)


def split_list(value: str) -> list[str]:
    return [part.strip() for part in LIST_SPLIT_RE.split(value or "") if part.strip()]


def select_email(emails: Iterable[RawEmailRecord] | None) -> str:
    emails = [email for email in emails or [] if email.address]
    for email in emails:
        if email.preferred:
            return email.address
    return emails[0].address if emails else ""


def proficiency_level(text: str | None) -> int | None:
    """Map a LinkedIn proficiency string onto a 1-5 scale.

    Elementary=2, Limited working=3, Professional working=4, Full
    professional and Native or bilingual=5. Any other non-empty text counts
    as 1; blank text has no level.
    """
    lowered = " ".join((text or "").replace("_", " ").lower().split())
    if not lowered:
        return None
    for phrase, level in PROFICIENCY_LEVELS:
        if phrase in lowered:
            return level
    return 1


def language_label(record: RawLanguageRecord) -> str:
    if record.proficiency:
        return f"{record.name} ({record.proficiency})"
    return record.name


def link_type(url: str) -> tuple[str, str]:
    target = url if "://" in url else f"https://{url}"
    host = (urlsplit(target).hostname or "").lower()
    for domain, kind, label in LINK_DOMAINS:
        if host == domain or host.endswith(f".{domain}"):
            return kind, label
    return "website", "Website"


def parse_links(
    websites: str, twitter_handles: str = "", document_links: bool = False
) -> list[Link]:
    links: list[Link] = []
    seen: set[str] = set()

    def add(url: str, prefix: str = "") -> None:
        if not url.lower().startswith(("http://", "https://")):
            url = f"https://{url}"
        key = url.rstrip("/").lower()
        if key in seen:
            return
        kind, label = link_type(url)
        if document_links and kind not in DOCUMENT_LINK_TYPES:
            return
        if kind == "website" and prefix:
            label = prefix.replace("_", " ").title()
        seen.add(key)
        links.append(Link(label=label, url=url, type=kind))

    for entry in split_list((websites or "").strip().strip("[]")):
        entry = entry.strip("[] ")
        match = WEBSITE_LABEL_RE.match(entry)
        prefix = match.group("label") if match else ""
        url = entry[match.end():] if match else entry
        if url:
            add(url, prefix)

    if not document_links:
        for handle in split_list((twitter_handles or "").strip().strip("[]")):
            handle = handle.strip("[] ")
            if handle.lower().startswith("http"):
                add(handle)
            elif handle.lstrip("@"):
                add(f"https://twitter.com/{handle.lstrip('@')}")
    return links


def assemble(
    aggregate: ParsedAggregate, document_links: bool = False
) -> tuple[ResumeContent, list[str]]:
    warnings: list[str] = []
    profile = aggregate.profile

    personal = PersonalInfo(email=select_email(aggregate.emails))
    if profile is not None:
        personal.first_name = profile.first_name
        personal.last_name = profile.last_name
        personal.title = profile.headline
        personal.phone = profile.phone
        personal.location = profile.geo_location or profile.address
        personal.summary = profile.summary
    if not personal.first_name and not personal.last_name:
        warnings.append(NO_NAME_WARNING)

    experience = []
    for position in aggregate.positions or []:
        description, highlights = split_description(position.description)
        end_date = normalize_date(position.finished_on)
        experience.append(
            Experience(
                company=position.company,
                position=position.title,
                location=position.location,
                start_date=normalize_date(position.started_on),
                end_date=end_date,
                current=not end_date,
                description=description,
                highlights=highlights,
            )
        )
    if not experience:
        warnings.append(NO_EXPERIENCE_WARNING)

    education = []
    for record in aggregate.education or []:
        degree, _, field = record.degree_name.partition(",")
        end_date = normalize_date(record.end_date)
        education.append(
            Education(
                institution=record.school,
                degree=degree.strip(),
                field=field.strip(),
                start_date=normalize_date(record.start_date),
                end_date=end_date,
                current=not end_date,
                honors=split_list(record.activities) or None,
            )
        )

    skills = categorize_skills(skill.name for skill in aggregate.skills or [])
    skills.languages = [
        language_label(language) for language in aggregate.languages or [] if language.name
    ]

    certifications = [
        Certification(
            name=record.name,
            issuer=record.authority,
            date=normalize_date(record.started_on),
            expiry_date=normalize_date(record.finished_on),
            credential_id=record.license_number,
            url=record.url,
        )
        for record in aggregate.certifications or []
        if record.name
    ]

    links = []
    if profile is not None:
        links = parse_links(profile.websites, profile.twitter_handles, document_links)

    content = ResumeContent(
        personal_info=personal,
        experience=experience,
        education=education,
        skills=skills,
        certifications=certifications,
        links=links,
    )
    logger.debug(
        "Assembled %d positions, %d schools, %d certifications, %d links; warnings=%s",
        len(experience),
        len(education),
        len(certifications),
        len(links),
        warnings,
    )
    return content, warnings


# -- canonical payloads -------------------------------------------------------


def field_text(mapping: dict, key: str) -> str:
    value = mapping.get(key)
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def field_list(mapping: dict, key: str) -> list[str]:
    value = mapping.get(key)
    if isinstance(value, str):
        return split_list(value)
    if not isinstance(value, list):
        return []
    items = (str(item).strip() for item in value if isinstance(item, (str, int, float)))
    return [item for item in items if item]


def dict_entries(payload: dict, key: str) -> list[dict]:
    value = payload.get(key)
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def coerce_personal_info(info: Any) -> PersonalInfo:
    if not isinstance(info, dict):
        return PersonalInfo()
    personal = PersonalInfo(
        first_name=field_text(info, "firstName"),
        last_name=field_text(info, "lastName"),
        name_order=field_text(info, "nameOrder") or "firstLast",
        title=field_text(info, "title"),
        email=field_text(info, "email"),
        phone=field_text(info, "phone"),
        location=field_text(info, "location"),
        summary=field_text(info, "summary"),
    )
    if not personal.first_name and not personal.last_name:
        first, _, last = field_text(info, "name").partition(" ")
        personal.first_name = first
        personal.last_name = last.strip()
    return personal


def coerce_skills(value: Any) -> Skills:
    if isinstance(value, list):
        return categorize_skills(str(item) for item in value if isinstance(item, str))
    if not isinstance(value, dict):
        return Skills()
    return Skills(
        technical=field_list(value, "technical"),
        languages=field_list(value, "languages"),
        tools=field_list(value, "tools"),
        soft=field_list(value, "soft"),
    )


def coerce_content(payload: Any) -> ResumeContent:
    """Read a canonical-shaped dict, tolerating gaps and legacy fields."""
    if not isinstance(payload, dict):
        return ResumeContent()
    if "personalInfo" not in payload and isinstance(payload.get("content"), dict):
        payload = payload["content"]

    experience = []
    for entry in dict_entries(payload, "experience"):
        end_date = normalize_date(field_text(entry, "endDate"))
        current = entry.get("current")
        experience.append(
            Experience(
                company=field_text(entry, "company"),
                position=field_text(entry, "position") or field_text(entry, "title"),
                location=field_text(entry, "location"),
                start_date=normalize_date(field_text(entry, "startDate")),
                end_date=end_date,
                current=current if isinstance(current, bool) else not end_date,
                description=field_text(entry, "description"),
                highlights=field_list(entry, "highlights"),
                id=field_text(entry, "id") or new_id(),
            )
        )

    education = []
    for entry in dict_entries(payload, "education"):
        end_date = normalize_date(field_text(entry, "endDate"))
        current = entry.get("current")
        education.append(
            Education(
                institution=field_text(entry, "institution") or field_text(entry, "school"),
                degree=field_text(entry, "degree"),
                field=field_text(entry, "field"),
                start_date=normalize_date(field_text(entry, "startDate")),
                end_date=end_date,
                current=current if isinstance(current, bool) else not end_date,
                honors=field_list(entry, "honors") or None,
                id=field_text(entry, "id") or new_id(),
            )
        )

    certifications = [
        Certification(
            name=field_text(entry, "name"),
            issuer=field_text(entry, "issuer"),
            date=normalize_date(field_text(entry, "date")),
            expiry_date=normalize_date(field_text(entry, "expiryDate")),
            credential_id=field_text(entry, "credentialId"),
            url=field_text(entry, "url"),
            id=field_text(entry, "id") or new_id(),
        )
        for entry in dict_entries(payload, "certifications")
        if field_text(entry, "name")
    ]

    links = []
    for entry in dict_entries(payload, "links"):
        url = field_text(entry, "url")
        if not url:
            continue
        kind, label = link_type(url)
        links.append(
            Link(
                label=field_text(entry, "label") or label,
                url=url,
                type=field_text(entry, "type") or kind,
                id=field_text(entry, "id") or new_id(),
            )
        )

    return ResumeContent(
        personal_info=coerce_personal_info(payload.get("personalInfo")),
        experience=experience,
        education=education,
        skills=coerce_skills(payload.get("skills")),
        certifications=certifications,
        links=links,
    )
