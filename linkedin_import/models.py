"""Record types shared by the archive and document paths.

Raw records mirror the LinkedIn export tables column for column and live
for a single import call. The canonical types are what callers receive,
serialized with the camelCase keys of the resume schema.
"""

from __future__ import annotations

import dataclasses
import uuid
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def cell(row: dict, key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def is_yes(value: str) -> bool:
    return value.strip().lower() in {"yes", "true", "1"}


@dataclasses.dataclass
class RawProfileRecord:
    first_name: str = ""
    last_name: str = ""
    maiden_name: str = ""
    headline: str = ""
    summary: str = ""
    industry: str = ""
    geo_location: str = ""
    address: str = ""
    zip_code: str = ""
    websites: str = ""
    twitter_handles: str = ""
    instant_messengers: str = ""
    phone: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawProfileRecord:
        return cls(
            first_name=cell(row, "First Name"),
            last_name=cell(row, "Last Name"),
            maiden_name=cell(row, "Maiden Name"),
            headline=cell(row, "Headline"),
            summary=cell(row, "Summary"),
            industry=cell(row, "Industry"),
            geo_location=cell(row, "Geo Location"),
            address=cell(row, "Address"),
            zip_code=cell(row, "Zip Code"),
            websites=cell(row, "Websites"),
            twitter_handles=cell(row, "Twitter Handles"),
            instant_messengers=cell(row, "Instant Messengers"),
        )


@dataclasses.dataclass
class RawPositionRecord:
    company: str = ""
    title: str = ""
    description: str = ""
    location: str = ""
    started_on: str = ""
    finished_on: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawPositionRecord:
        return cls(
            company=cell(row, "Company Name"),
            title=cell(row, "Title"),
            description=cell(row, "Description"),
            location=cell(row, "Location"),
            started_on=cell(row, "Started On"),
            finished_on=cell(row, "Finished On"),
        )


@dataclasses.dataclass
class RawEducationRecord:
    school: str = ""
    degree_name: str = ""
    start_date: str = ""
    end_date: str = ""
    notes: str = ""
    activities: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawEducationRecord:
        return cls(
            school=cell(row, "School Name"),
            degree_name=cell(row, "Degree Name"),
            start_date=cell(row, "Start Date"),
            end_date=cell(row, "End Date"),
            notes=cell(row, "Notes"),
            activities=cell(row, "Activities"),
        )


@dataclasses.dataclass
class RawSkillRecord:
    name: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawSkillRecord:
        return cls(name=cell(row, "Name"))


@dataclasses.dataclass
class RawCertificationRecord:
    name: str = ""
    url: str = ""
    authority: str = ""
    started_on: str = ""
    finished_on: str = ""
    license_number: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawCertificationRecord:
        return cls(
            name=cell(row, "Name"),
            url=cell(row, "Url"),
            authority=cell(row, "Authority"),
            started_on=cell(row, "Started On"),
            finished_on=cell(row, "Finished On"),
            license_number=cell(row, "License Number"),
        )


@dataclasses.dataclass
class RawLanguageRecord:
    name: str = ""
    proficiency: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawLanguageRecord:
        return cls(name=cell(row, "Name"), proficiency=cell(row, "Proficiency"))


@dataclasses.dataclass
class RawEmailRecord:
    address: str = ""
    confirmed: str = ""
    primary: str = ""
    updated_on: str = ""

    @classmethod
    def from_row(cls, row: dict) -> RawEmailRecord:
        return cls(
            address=cell(row, "Email Address"),
            confirmed=cell(row, "Confirmed"),
            primary=cell(row, "Primary"),
            updated_on=cell(row, "Updated On"),
        )

    @property
    def preferred(self) -> bool:
        return is_yes(self.primary) or is_yes(self.confirmed)


@dataclasses.dataclass
class ParsedAggregate:
    """Everything one decoder pulled out of its input.

    A list left as ``None`` means the source had no such table at all; an
    empty list means the table was there but held no usable rows.
    """

    profile: RawProfileRecord | None = None
    positions: list[RawPositionRecord] | None = None
    education: list[RawEducationRecord] | None = None
    skills: list[RawSkillRecord] | None = None
    certifications: list[RawCertificationRecord] | None = None
    languages: list[RawLanguageRecord] | None = None
    emails: list[RawEmailRecord] | None = None

    @property
    def has_profile(self) -> bool:
        return self.profile is not None

    @property
    def has_positions(self) -> bool:
        return bool(self.positions)

    @property
    def has_education(self) -> bool:
        return bool(self.education)

    @property
    def has_skills(self) -> bool:
        return bool(self.skills)

    @property
    def has_primary_data(self) -> bool:
        return self.has_profile or self.has_positions or self.has_education or self.has_skills

    @property
    def is_profile_only(self) -> bool:
        return self.has_profile and not (
            self.has_positions or self.has_education or self.has_skills
        )

    def summary(self) -> dict[str, int]:
        return {
            "profile": int(self.has_profile),
            "positions": len(self.positions or []),
            "education": len(self.education or []),
            "skills": len(self.skills or []),
            "certifications": len(self.certifications or []),
            "languages": len(self.languages or []),
            "emails": len(self.emails or []),
        }


@dataclasses.dataclass
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    name_order: str = "firstLast"
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""

    def is_empty(self) -> bool:
        return not any(
            (
                self.first_name,
                self.last_name,
                self.title,
                self.email,
                self.phone,
                self.location,
                self.summary,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "nameOrder": self.name_order,
            "title": self.title,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "summary": self.summary,
        }


@dataclasses.dataclass
class Experience:
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    highlights: list[str] = dataclasses.field(default_factory=list)
    id: str = dataclasses.field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "company": self.company,
            "position": self.position,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
            "description": self.description,
            "highlights": list(self.highlights),
        }


@dataclasses.dataclass
class Education:
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    honors: list[str] | None = None
    id: str = dataclasses.field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "institution": self.institution,
            "degree": self.degree,
            "field": self.field,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
        }
        if self.honors:
            data["honors"] = list(self.honors)
        return data


@dataclasses.dataclass
class Skills:
    technical: list[str] = dataclasses.field(default_factory=list)
    languages: list[str] = dataclasses.field(default_factory=list)
    tools: list[str] = dataclasses.field(default_factory=list)
    soft: list[str] = dataclasses.field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.technical or self.languages or self.tools or self.soft)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "technical": list(self.technical),
            "languages": list(self.languages),
            "tools": list(self.tools),
            "soft": list(self.soft),
        }


@dataclasses.dataclass
class Certification:
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiry_date: str = ""
    credential_id: str = ""
    url: str = ""
    id: str = dataclasses.field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "issuer": self.issuer,
            "date": self.date,
        }
        if self.expiry_date:
            data["expiryDate"] = self.expiry_date
        if self.credential_id:
            data["credentialId"] = self.credential_id
        if self.url:
            data["url"] = self.url
        return data


@dataclasses.dataclass
class Link:
    label: str
    url: str
    type: str = "website"
    id: str = dataclasses.field(default_factory=new_id)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "label": self.label, "url": self.url, "type": self.type}


@dataclasses.dataclass
class ResumeContent:
    personal_info: PersonalInfo = dataclasses.field(default_factory=PersonalInfo)
    experience: list[Experience] = dataclasses.field(default_factory=list)
    education: list[Education] = dataclasses.field(default_factory=list)
    skills: Skills = dataclasses.field(default_factory=Skills)
    certifications: list[Certification] = dataclasses.field(default_factory=list)
    links: list[Link] = dataclasses.field(default_factory=list)

    def is_empty(self) -> bool:
        return (
            self.personal_info.is_empty()
            and not self.experience
            and not self.education
            and self.skills.is_empty()
            and not self.certifications
            and not self.links
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": self.skills.to_dict(),
            "certifications": [entry.to_dict() for entry in self.certifications],
            "links": [entry.to_dict() for entry in self.links],
        }


@dataclasses.dataclass
class ImportResult:
    success: bool
    data: dict[str, Any] | None = None
    warnings: list[str] | None = None
    error: str | None = None

    @classmethod
    def ok(cls, content: ResumeContent, warnings: list[str] | None = None) -> ImportResult:
        if content.is_empty():
            raise ValueError("a successful import needs at least one populated section")
        return cls(
            success=True,
            data=content.to_dict(),
            warnings=list(warnings) if warnings else None,
        )

    @classmethod
    def fail(cls, error: str) -> ImportResult:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in dataclasses.asdict(self).items()
            if value is not None
        }
