"""
Heuristic recovery of LinkedIn records from "Save to PDF" text.

The text usually arrives from :func:`document.read_document` with one
layout line per text line and a form feed between the sidebar and the main
column. Text pasted or extracted elsewhere may have no line breaks at all;
every section then falls back to regexes over the flattened string.

Nothing in here raises because of content: a field that cannot be found is
left empty and the assembler reports it.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from unidecode import unidecode

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

COLUMN_BREAK = "\f"
SECTION_BREAK_RE = re.compile(r"[\f\u2029]")

SECTION_HEADINGS = {
    "contact": "contact",
    "top skills": "skills",
    "skills": "skills",
    "languages": "languages",
    "certifications": "certifications",
    "licenses & certifications": "certifications",
    "honors awards": "honors",
    "honors & awards": "honors",
    "summary": "summary",
    "about": "summary",
    "experience": "experience",
    "education": "education",
    "publications": "publications",
    "patents": "patents",
}

# Spelling used by the PDF renderer, for searching flattened text.
FLAT_HEADINGS = (
    ("contact", "Contact"),
    ("skills", "Top Skills"),
    ("languages", "Languages"),
    ("certifications", "Certifications"),
    ("honors", "Honors-Awards"),
    ("summary", "Summary"),
    ("experience", "Experience"),
    ("education", "Education"),
    ("publications", "Publications"),
    ("patents", "Patents"),
)

ROLE_KEYWORDS = (
    "developer",
    "engineer",
    "manager",
    "director",
    "lead",
    "architect",
    "consultant",
    "analyst",
    "designer",
    "owner",
    "founder",
    "cto",
    "ceo",
    "cfo",
    "vp",
    "head",
    "principal",
    "senior",
    "junior",
    "staff",
    "chief",
    "intern",
    "specialist",
    "scientist",
    "researcher",
    "president",
    "officer",
    "coordinator",
    "administrator",
    "programmer",
    "student",
    "professor",
    "partner",
    "associate",
    "technician",
    "recruiter",
    "advisor",
)
ROLE_ALT = "|".join(ROLE_KEYWORDS)
ROLE_RE = re.compile(rf"\b(?:{ROLE_ALT})(?:s|ing)?\b", re.I)

DENY_TOKENS = {
    "contact",
    "summary",
    "experience",
    "education",
    "skills",
    "top",
    "languages",
    "language",
    "certifications",
    "certification",
    "certified",
    "certificate",
    "honors",
    "awards",
    "publications",
    "patents",
    "linkedin",
    "page",
    "present",
    "university",
    "college",
    "school",
    "institute",
    "academy",
    "native",
    "bilingual",
    "professional",
    "working",
    "proficiency",
    "limited",
    "elementary",
    "solutions",
}

MONTH_ALT = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
DATE_TOKEN = rf"(?:(?i:{MONTH_ALT})\.?\s+)?\d{{4}}"
DATE_RANGE_RE = re.compile(
    rf"(?P<start>{DATE_TOKEN})\s*[-–—]\s*(?P<end>{DATE_TOKEN}|(?i:present))"
)
DURATION_LINE_RE = re.compile(
    r"^\d+\s+(?:years?|yrs?|months?|mos?)(?:\s+\d+\s+(?:months?|mos?))?$", re.I
)
TITLE_DATE_RE = re.compile(
    rf"(?P<title>(?:(?:[A-Z][\w&/+.'-]*|of|and|&|for)\s+){{0,5}}"
    rf"(?i:{ROLE_ALT})\w*)\s+{DATE_RANGE_RE.pattern}"
)
COMPANY_DURATION_RE = re.compile(
    r"(?P<company>[A-Z][\w&.'-]*(?:\s+(?:[A-Z&][\w&.'-]*|of|and|de))*)\s+"
    r"(?P<duration>\d+\s+(?:years?|yrs?|months?|mos?)(?:\s+\d+\s+(?:months?|mos?))?)\b"
)

INSTITUTION_ALT = r"University|Universit\w+|College|School|Institute|Academy|Polytechnic"
DEGREE_ALT = (
    r"Bachelor|Master|Doctor|PhD|Ph\.D|BSc|MSc|BEng|MEng|MBA|Associate|Diploma"
    r"|Certificate|BA|MA|BS|MS"
)
INSTITUTION_RE = re.compile(rf"\b(?:{INSTITUTION_ALT})\b")
DEGREE_KEYWORD_RE = re.compile(rf"\b(?:{DEGREE_ALT})\b")
SCHOOL_RE = re.compile(
    rf"^(?P<school>.*?\b(?:{INSTITUTION_ALT})\b"
    rf"(?:\s+(?:of|for|de)(?:\s+(?!(?:{DEGREE_ALT})\b)[A-Z][\w'&.-]*)+)?)"
)
EDUCATION_DATES_RE = re.compile(
    rf"\s*·?\s*\(\s*(?P<start>{DATE_TOKEN})?\s*"
    rf"(?:[-–—]\s*(?P<end>{DATE_TOKEN}|(?i:present)))?\s*\)"
)
TRAILING_YEAR_RE = re.compile(r"^\d{4}\)?$")

HYPHENATED_RE = re.compile(r"\b[A-Za-z][\w+#.]*-[A-Za-z][\w+#.]*")
CAPITALIZED_PAIR_RE = re.compile(r"\b[A-Z][\w+#.]*\s+[A-Z][\w+#.]*")
CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][\w+#.]*")
SKILL_PATTERNS = (HYPHENATED_RE, CAPITALIZED_PAIR_RE, CAPITALIZED_WORD_RE)
TOP_SKILLS = 3

KNOWN_TECHNOLOGIES = (
    "Python",
    "Java",
    "JavaScript",
    "TypeScript",
    "Docker",
    "Kubernetes",
    "AWS",
    "Azure",
    "GCP",
    "Google Cloud",
    "React",
    "Angular",
    "Node.js",
    "SQL",
    "Git",
    "Linux",
    "Terraform",
    "Excel",
    "Scrum",
    "Agile",
    "Machine Learning",
    "Data Science",
)
CERT_SPLIT_RE = re.compile(
    r"\s+(?=Learning\s|(?:%s):)" % "|".join(re.escape(tech) for tech in KNOWN_TECHNOLOGIES)
)

LANGUAGE_LINE_RE = re.compile(r"^(?P<name>[^()]+?)\s*\((?P<proficiency>[^)]+)\)$")
LANGUAGE_FLAT_RE = re.compile(
    r"(?P<name>[A-Z][^\W\d_]+(?:\s[A-Z][^\W\d_]+)?)\s*\((?P<proficiency>[^)]+)\)"
)

NAME_WORD_RE = re.compile(r"[A-ZÀ-ÖØ-Þ][^\W\d_]*(?:[-'’][^\W\d_]+)*\.?")
NAME_PAIR_RE = re.compile(r"\b([A-ZÀ-ÖØ-Þ][^\W\d_]+)\s+([A-ZÀ-ÖØ-Þ][^\W\d_]+)\b")
LOCATION_LINE_RE = re.compile(
    r"^[^\W\d_][\w .'-]*,\s*[^\W\d_][\w .'-]*(?:,\s*[^\W\d_][\w .'-]*)?$"
)
FLAT_LOCATION_RE = re.compile(
    r"[A-Z][^\W\d_]+(?:\s[A-Z][^\W\d_]+){0,2},\s(?:[A-Z][\w .'-]*?,\s)?"
    r"[A-Z][^\W\d_]+(?:\s[A-Z][^\W\d_]+)?"
)
NAME_BEFORE_LOCATION_RE = re.compile(
    r"(?<!\S)(?=(?P<name>[A-Z][^\W\d_]+(?:\s[A-Z][^\W\d_]+){1,2})\s"
    r"[A-Z][^\W\d_]+(?:\s[A-Z][^\W\d_]+){0,2},\s[A-Z][\w .'-]*?,\s[A-Z])"
)
LOCATION_KEYWORDS = {"area", "region", "metropolitan", "province", "state"}

EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.I)
URL_RE = re.compile(
    r"https?://\S+|www\.\S+|linkedin\.com/\S+|github\.com/\S+",
    re.I,
)
WRAPPED_LINKEDIN_RE = re.compile(
    r"((?:https?://)?(?:www\.)?linkedin\.com/in/[\w%-]*-)\s+([\w%-]+)\s*\(LinkedIn\)",
    re.I,
)
LINKEDIN_HANDLE_RE = re.compile(r"(\S+)\s*\(LinkedIn\)", re.I)
PHONE_RE = re.compile(r"\+?\(?\d[\d\s().-]{5,}\d")
BULLET_PREFIXES = ("•", "-", "*", "–", "◦")

MIN_CONFIDENT_POSITIONS = 3


# -- text shape ---------------------------------------------------------------


def normalize_heading(text: str) -> str:
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"[^\w\s&]+", " ", text.lower())
    return " ".join(text.split())


def heading_key(text: str) -> str | None:
    return SECTION_HEADINGS.get(normalize_heading(text))


def text_lines(text: str) -> list[str]:
    text = SECTION_BREAK_RE.sub(f"\n{COLUMN_BREAK}\n", text)
    lines: list[str] = []
    for raw in text.split("\n"):
        if raw == COLUMN_BREAK:
            lines.append(COLUMN_BREAK)
            continue
        stripped = raw.strip()
        if stripped:
            lines.append(stripped)
    return lines


def flatten(text: str) -> str:
    return " ".join(SECTION_BREAK_RE.sub(" ", text).split())


def sectioned_lines(lines: list[str]) -> list[tuple[str | None, str]]:
    """Pair every non-heading line with the section it sits in.

    A column break closes the open section: sidebar sections never run on
    into the main column.
    """
    tagged: list[tuple[str | None, str]] = []
    current: str | None = None
    for line in lines:
        if line == COLUMN_BREAK:
            current = None
            continue
        key = heading_key(line)
        if key:
            current = key
            tagged.append((key, ""))
            continue
        tagged.append((current, line))
    return tagged


def split_sections(lines: list[str]) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {}
    for key, line in sectioned_lines(lines):
        if key is None:
            continue
        entries = sections.setdefault(key, [])
        if line:
            entries.append(line)
    return sections


def find_heading(flat: str, heading: str) -> re.Match | None:
    return re.search(rf"(?<!\S){re.escape(heading)}(?!\S)", flat)


def flat_spans(flat: str) -> list[tuple[int, int, int, str]]:
    """(heading start, body start, body end, key) for each heading found."""
    found = []
    for key, heading in FLAT_HEADINGS:
        match = find_heading(flat, heading)
        if match:
            found.append((match.start(), match.end(), key))
    found.sort()
    spans = []
    for index, (start, end, key) in enumerate(found):
        stop = found[index + 1][0] if index + 1 < len(found) else len(flat)
        spans.append((start, end, stop, key))
    return spans


def flat_sections(flat: str) -> dict[str, str]:
    return {key: flat[body:stop].strip() for _, body, stop, key in flat_spans(flat)}


# Sections a name never sits in. Honors and certifications stay searchable
# because a single-column rendering runs them straight into the name.
NAME_EXCLUDED_SECTIONS = {
    "contact",
    "skills",
    "languages",
    "summary",
    "experience",
    "education",
    "publications",
    "patents",
}


def name_scope_lines(text: str) -> list[str]:
    return [
        line
        for key, line in sectioned_lines(text_lines(text))
        if line and key not in NAME_EXCLUDED_SECTIONS
    ]


def name_scope_flat(text: str) -> str:
    flat = flatten(text)
    for start, _, stop, key in reversed(flat_spans(flat)):
        if key in NAME_EXCLUDED_SECTIONS:
            flat = f"{flat[:start]} | {flat[stop:]}"
    return flat


# -- line classification ------------------------------------------------------


def contains_role_keyword(text: str) -> bool:
    return bool(ROLE_RE.search(text))


def is_name_candidate(text: str) -> bool:
    text = text.strip()
    if not text or len(text) > 50 or any(char.isdigit() for char in text):
        return False
    if any(char in text for char in "@/,()|:"):
        return False
    words = text.split()
    if not 2 <= len(words) <= 4:
        return False
    if not all(NAME_WORD_RE.fullmatch(word) for word in words):
        return False
    tokens = {part.lower() for word in words for part in re.split(r"[-'’]", word)}
    if tokens & DENY_TOKENS:
        return False
    return not contains_role_keyword(text)


def is_location_text(text: str) -> bool:
    text = text.strip()
    if not text or len(text) > 60 or any(char.isdigit() for char in text):
        return False
    if EMAIL_RE.search(text) or contains_role_keyword(text):
        return False
    if LOCATION_LINE_RE.match(text):
        return True
    return any(word in LOCATION_KEYWORDS for word in text.lower().split())


def is_duration_line(text: str) -> bool:
    return bool(DURATION_LINE_RE.match(text.strip()))


def date_line_match(text: str) -> re.Match | None:
    text = text.strip()
    match = DATE_RANGE_RE.match(text)
    if match is None:
        return None
    rest = text[match.end():].strip()
    if rest and not rest.startswith("("):
        return None
    return match


def is_bullet(text: str) -> bool:
    return text.startswith(BULLET_PREFIXES)


def is_header_line(text: str) -> bool:
    text = text.strip()
    if not text or len(text) > 60 or is_bullet(text):
        return False
    if text.endswith((".", ":", ";", ",")) or not text[0].isupper():
        return False
    return not (date_line_match(text) or is_duration_line(text) or is_location_text(text))


def end_date(value: str) -> str:
    return "" if value.strip().lower() == "present" else value.strip()


def drop_location_tail(text: str, start: int, value: str) -> str:
    # A match that starts right after "City, Country" usually swallowed the
    # country as its first word.
    if text[:start].rstrip().endswith(",") and " " in value:
        return value.split(" ", 1)[1]
    return value


# -- name ---------------------------------------------------------------------


def name_before_title(text: str) -> str | None:
    if "\n" in text:
        lines = name_scope_lines(text)
        for line, following in zip(lines, lines[1:]):
            if is_name_candidate(line) and contains_role_keyword(following):
                return line
        return None
    words = name_scope_flat(text).split()
    for index in range(len(words)):
        for size in (2, 3):
            if index + size >= len(words):
                break
            candidate = " ".join(words[index : index + size])
            if is_name_candidate(candidate) and contains_role_keyword(words[index + size]):
                return candidate
    return None


def name_after_break(text: str) -> str | None:
    for chunk in SECTION_BREAK_RE.split(text)[1:]:
        chunk = chunk.strip()
        if not chunk:
            continue
        first = chunk.split("\n")[0].strip()
        if is_name_candidate(first):
            return first
        words = first.split()
        for size in (2, 3):
            candidate = " ".join(words[:size])
            if len(words) >= size and is_name_candidate(candidate):
                return candidate
    return None


def name_before_location(text: str) -> str | None:
    if "\n" in text:
        lines = name_scope_lines(text)
        for line, following in zip(lines, lines[1:]):
            if is_name_candidate(line) and LOCATION_LINE_RE.match(following):
                return line
        return None
    for match in NAME_BEFORE_LOCATION_RE.finditer(name_scope_flat(text)):
        if is_name_candidate(match.group("name")):
            return match.group("name")
    return None


def name_after_honors(text: str) -> str | None:
    if "\n" in text:
        lines = [line for line in text_lines(text) if line != COLUMN_BREAK]
        for index, line in enumerate(lines[:-1]):
            if heading_key(line) == "honors" and is_name_candidate(lines[index + 1]):
                return lines[index + 1]
        return None
    match = re.search(r"Honors-Awards\s+(\S+\s+\S+)", flatten(text))
    if match and is_name_candidate(match.group(1)):
        return match.group(1)
    return None


def name_from_email(text: str) -> str | None:
    match = EMAIL_RE.search(text)
    if match is None:
        return None
    local = match.group(0).split("@", 1)[0].lower()
    parts = [part for part in re.split(r"[._\-+]+", re.sub(r"\d+", "", local)) if part]
    joined = "".join(parts)
    if not joined:
        return None
    for pair in NAME_PAIR_RE.finditer(flatten(text)):
        # addresses are ASCII, names may not be
        first, last = unidecode(pair.group(1)).lower(), unidecode(pair.group(2)).lower()
        if len(parts) >= 2:
            matched = first == parts[0] and last == parts[-1]
        else:
            matched = first + last == joined or (
                joined.startswith(first[:1]) and joined.endswith(last)
            )
        candidate = f"{pair.group(1)} {pair.group(2)}"
        if matched and is_name_candidate(candidate):
            return candidate
    return None


NAME_STRATEGIES = (
    name_before_title,
    name_after_break,
    name_before_location,
    name_after_honors,
    name_from_email,
)


def find_name(text: str) -> str:
    for strategy in NAME_STRATEGIES:
        name = strategy(text)
        if name:
            logger.debug("Name %r found by %s", name, strategy.__name__)
            return name
    logger.debug("No name strategy matched")
    return ""


# -- experience ---------------------------------------------------------------


def join_wrapped(lines: list[str]) -> list[str]:
    joined: list[str] = []
    for text in lines:
        if joined and is_bullet(joined[-1]) and not is_bullet(text) and text[:1].islower():
            joined[-1] = f"{joined[-1]} {text}"
            continue
        if text.startswith(("–", "◦")):
            text = "- " + text[1:].strip()
        joined.append(text)
    return joined


def title_index(buffer: list[str]) -> int | None:
    if not buffer:
        return None
    for index in range(len(buffer) - 1, max(len(buffer) - 3, -1), -1):
        if contains_role_keyword(buffer[index]) and not is_location_text(buffer[index]):
            return index
    return len(buffer) - 1


def experience_from_lines(lines: list[str]) -> tuple[list[RawPositionRecord], int]:
    positions: list[RawPositionRecord] = []
    details: list[list[str]] = []
    buffer: list[str] = []
    last_company = ""
    company_locked = False
    after_date = False
    for text in lines:
        if after_date:
            after_date = False
            if is_location_text(text):
                positions[-1].location = text
                continue
        if is_duration_line(text):
            if buffer:
                last_company = buffer.pop()
                company_locked = True
            if positions:
                details[-1].extend(buffer)
            buffer = []
            continue
        match = date_line_match(text)
        if match is None:
            buffer.append(text)
            continue

        index = title_index(buffer)
        title = buffer[index] if index is not None else ""
        head = buffer[:index] if index is not None else []
        company = ""
        if head and is_header_line(head[-1]):
            company = head.pop()
            last_company = company
            company_locked = False
        elif company_locked:
            company = last_company
        if positions:
            details[-1].extend(head)

        positions.append(
            RawPositionRecord(
                company=company,
                title=title,
                started_on=match.group("start"),
                finished_on=end_date(match.group("end")),
            )
        )
        details.append([])
        buffer = []
        after_date = True

    if positions:
        details[-1].extend(buffer)
    for position, detail in zip(positions, details):
        position.description = "\n".join(join_wrapped(detail))
    positions = [position for position in positions if position.title or position.company]
    return positions, len(positions)


def experience_from_flat(text: str) -> tuple[list[RawPositionRecord], int]:
    companies = [
        (match.start(), drop_location_tail(text, match.start(), match.group("company")))
        for match in COMPANY_DURATION_RE.finditer(text)
    ]
    positions = []
    for match in TITLE_DATE_RE.finditer(text):
        company = ""
        for start, name in companies:
            if start >= match.start():
                break
            company = name
        positions.append(
            RawPositionRecord(
                company=company,
                title=drop_location_tail(text, match.start(), match.group("title")).strip(),
                started_on=match.group("start"),
                finished_on=end_date(match.group("end")),
            )
        )
    return positions, len(positions)


def recover_experience(section: str, line_mode: bool) -> list[RawPositionRecord]:
    positions, found = experience_from_lines(section.split("\n")) if line_mode else ([], 0)
    logger.debug("Experience line pass: %d positions", found)
    if found >= MIN_CONFIDENT_POSITIONS:
        return positions
    fallback, fallback_found = experience_from_flat(flatten(section))
    logger.debug("Experience regex fallback: %d positions", fallback_found)
    return fallback if fallback_found > found else positions


# -- education ----------------------------------------------------------------


def split_school_degree(chunk: str) -> tuple[str, str]:
    chunk = chunk.strip(" ·")
    match = DEGREE_KEYWORD_RE.search(chunk)
    if match and match.start() > 0:
        return chunk[: match.start()].strip(), chunk[match.start() :].strip(" ·")
    match = SCHOOL_RE.match(chunk)
    if match:
        return match.group("school").strip(), chunk[match.end() :].strip(" ·")
    return chunk, ""


def education_from_lines(lines: list[str]) -> tuple[list[RawEducationRecord], int]:
    records = []
    index = 0
    while index < len(lines):
        school = lines[index]
        following = lines[index + 1] if index + 1 < len(lines) else ""
        if following and ("·" in following or EDUCATION_DATES_RE.search(following)):
            consumed = 2
            if index + 2 < len(lines) and TRAILING_YEAR_RE.match(lines[index + 2]):
                following = f"{following} {lines[index + 2]}"
                consumed = 3
            dates = EDUCATION_DATES_RE.search(following)
            degree = following[: dates.start()] if dates else following.split("·")[0]
            records.append(
                RawEducationRecord(
                    school=school,
                    degree_name=degree.strip(" ·"),
                    start_date=(dates.group("start") or "") if dates else "",
                    end_date=end_date(dates.group("end") or "") if dates else "",
                )
            )
            index += consumed
            continue
        if INSTITUTION_RE.search(school):
            records.append(RawEducationRecord(school=school))
        index += 1
    return records, len(records)


def education_from_flat(text: str) -> tuple[list[RawEducationRecord], int]:
    records = []
    previous = 0
    for match in EDUCATION_DATES_RE.finditer(text):
        school, degree = split_school_degree(text[previous : match.start()])
        previous = match.end()
        if not school:
            continue
        records.append(
            RawEducationRecord(
                school=school,
                degree_name=degree,
                start_date=match.group("start") or "",
                end_date=end_date(match.group("end") or ""),
            )
        )
    return records, len(records)


def recover_education(section: str, line_mode: bool) -> list[RawEducationRecord]:
    records, found = education_from_lines(section.split("\n")) if line_mode else ([], 0)
    logger.debug("Education line pass: %d entries", found)
    if found:
        return records
    fallback, fallback_found = education_from_flat(flatten(section))
    logger.debug("Education regex fallback: %d entries", fallback_found)
    return fallback


# -- sidebar sections ---------------------------------------------------------


def skills_from_flat(text: str) -> tuple[list[str], int]:
    found: list[tuple[int, str]] = []
    remaining = text
    for pattern in SKILL_PATTERNS:
        if len(found) >= TOP_SKILLS:
            break
        for match in pattern.finditer(remaining):
            found.append((match.start(), match.group(0).strip().rstrip(".")))
        # mask with a non-space so later pairs cannot span a taken term
        remaining = pattern.sub(lambda m: "|" * len(m.group(0)), remaining)
    names = [name for _, name in sorted(found) if name][:TOP_SKILLS]
    return names, len(names)


def recover_skills(section: str, line_mode: bool) -> list[str]:
    if line_mode:
        names = [line for line in section.split("\n") if line.strip()][:TOP_SKILLS]
        if names:
            return names
    names, found = skills_from_flat(flatten(section))
    logger.debug("Top skills positional cascade: %d candidates", found)
    return names


def cut_at_name(section: str, name: str) -> str:
    if name and name in section:
        return section[: section.index(name)]
    return section


def certifications_from_lines(lines: list[str]) -> tuple[list[str], int]:
    names: list[str] = []
    for text in lines:
        if not text.strip():
            continue
        if names and (text.startswith(("(", "-")) or text[:1].islower()):
            names[-1] = f"{names[-1]} {text}"
            continue
        names.append(text)
    return names, len(names)


def certifications_from_flat(text: str) -> tuple[list[str], int]:
    names = [part.strip() for part in CERT_SPLIT_RE.split(text) if part.strip()]
    return names, len(names)


def recover_certifications(section: str, line_mode: bool, name: str) -> list[str]:
    section = cut_at_name(section, name)
    if line_mode:
        names, found = certifications_from_lines(section.split("\n"))
        if found:
            return names
    names, found = certifications_from_flat(flatten(section))
    logger.debug("Certifications flattened split: %d entries", found)
    return names


def recover_languages(section: str, line_mode: bool) -> list[RawLanguageRecord]:
    if line_mode:
        records = []
        for text in section.split("\n"):
            text = text.strip()
            if not text:
                continue
            match = LANGUAGE_LINE_RE.match(text)
            if match:
                records.append(
                    RawLanguageRecord(
                        name=match.group("name").strip(),
                        proficiency=match.group("proficiency").strip(),
                    )
                )
            else:
                records.append(RawLanguageRecord(name=text))
        return records
    records = [
        RawLanguageRecord(
            name=match.group("name").strip(),
            proficiency=match.group("proficiency").strip(),
        )
        for match in LANGUAGE_FLAT_RE.finditer(section)
    ]
    if records:
        return records
    return [RawLanguageRecord(name=part.strip()) for part in section.split("\n") if part.strip()]


# -- profile ------------------------------------------------------------------


def find_phone(section: str) -> str:
    # profile URLs often end in a long numeric suffix
    section = WRAPPED_LINKEDIN_RE.sub(" ", section)
    section = LINKEDIN_HANDLE_RE.sub(" ", URL_RE.sub(" ", EMAIL_RE.sub(" ", section)))
    for match in PHONE_RE.finditer(section):
        digits = re.sub(r"\D", "", match.group(0))
        if 7 <= len(digits) <= 15 and not DATE_RANGE_RE.search(match.group(0)):
            return match.group(0).strip()
    return ""


def find_profile_links(text: str) -> list[str]:
    collected = [first + rest for first, rest in WRAPPED_LINKEDIN_RE.findall(text)]
    remaining = WRAPPED_LINKEDIN_RE.sub(" ", text)
    for url in URL_RE.findall(remaining):
        url = url.rstrip(").,;")
        lowered = url.lower()
        if "linkedin.com" in lowered or "github.com" in lowered:
            collected.append(url)
    if not any("linkedin.com" in url.lower() for url in collected):
        match = LINKEDIN_HANDLE_RE.search(remaining)
        if match and "linkedin.com" not in match.group(1).lower():
            collected.append(f"https://www.linkedin.com/in/{match.group(1).strip()}")

    links: list[str] = []
    seen = set()
    for url in collected:
        if not url.lower().startswith(("http://", "https://")):
            url = f"https://{url}"
        key = url.rstrip("/").lower()
        if key in seen:
            continue
        seen.add(key)
        links.append(url)
    return links


def headline_and_location(lines: list[str], name: str) -> tuple[str, str]:
    if not name or name not in lines:
        return "", ""
    index = lines.index(name)
    following = []
    for text in lines[index + 1 : index + 4]:
        if text == COLUMN_BREAK or heading_key(text):
            break
        following.append(text)
    headline = ""
    if following and not is_location_text(following[0]):
        headline = following[0]
    location = next((text for text in following if is_location_text(text)), "")
    return headline, location


def flat_headline_and_location(flat: str, name: str) -> tuple[str, str]:
    if not name or name not in flat:
        return "", ""
    after = flat[flat.index(name) + len(name) :]
    headings = (find_heading(after, heading) for _, heading in FLAT_HEADINGS)
    stops = [match.start() for match in headings if match]
    if stops:
        after = after[: min(stops)]
    match = FLAT_LOCATION_RE.search(after)
    if match is None:
        return "", ""
    headline = after[: match.start()].strip()
    location = match.group(0).strip()
    # "Engineer at Acme San Francisco, ..." puts the company in front of the city
    city = location.split(",", 1)[0]
    if headline.split()[-1:] in (["at"], ["@"]) and " " in city:
        company, location = location.split(" ", 1)
        headline = f"{headline} {company}"
    return (headline if len(headline) <= 150 else ""), location


def profile_from_document(
    text: str, sections: dict[str, str], name: str, line_mode: bool
) -> RawProfileRecord | None:
    if line_mode:
        headline, location = headline_and_location(text_lines(text), name)
    else:
        headline, location = flat_headline_and_location(flatten(text), name)
    summary = " ".join(sections.get("summary", "").split())
    phone = find_phone(sections.get("contact", ""))
    websites = ", ".join(find_profile_links(text))
    logger.debug(
        "Document profile: headline=%r location=%r phone=%r links=%r",
        headline,
        location,
        phone,
        websites,
    )
    if not any((name, headline, summary, location, phone, websites)):
        return None
    first_name, _, last_name = name.partition(" ")
    return RawProfileRecord(
        first_name=first_name,
        last_name=last_name.strip(),
        headline=headline,
        summary=summary,
        geo_location=location,
        websites=websites,
        phone=phone,
    )


def find_emails(text: str) -> list[RawEmailRecord]:
    addresses = []
    for match in EMAIL_RE.finditer(text):
        address = match.group(0)
        if address.lower() not in (known.lower() for known in addresses):
            addresses.append(address)
    return [RawEmailRecord(address=address) for address in addresses]


def extract_document(text: str) -> ParsedAggregate:
    text = text or ""
    line_mode = "\n" in text.strip()
    if line_mode:
        sections = {
            key: "\n".join(lines) for key, lines in split_sections(text_lines(text)).items()
        }
    else:
        sections = flat_sections(flatten(text))
    logger.debug(
        "Document text: %d chars, %s mode, sections %s",
        len(text),
        "line" if line_mode else "flattened",
        sorted(sections),
    )

    name = find_name(text)
    aggregate = ParsedAggregate(
        profile=profile_from_document(text, sections, name, line_mode),
        emails=find_emails(text),
    )
    if "experience" in sections:
        aggregate.positions = recover_experience(sections["experience"], line_mode)
    if "education" in sections:
        aggregate.education = recover_education(sections["education"], line_mode)
    if "skills" in sections:
        aggregate.skills = [
            RawSkillRecord(name=skill) for skill in recover_skills(sections["skills"], line_mode)
        ]
    if "certifications" in sections:
        aggregate.certifications = [
            RawCertificationRecord(name=cert)
            for cert in recover_certifications(sections["certifications"], line_mode, name)
        ]
    if "languages" in sections:
        aggregate.languages = recover_languages(sections["languages"], line_mode)

    logger.info("Extracted LinkedIn document: %s", aggregate.summary())
    return aggregate
