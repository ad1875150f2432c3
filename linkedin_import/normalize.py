"""Deterministic normalizers shared by both import paths.

- dates: any LinkedIn date spelling -> ``YYYY-MM`` (or ``""``)
- descriptions: free text -> prose plus bullet highlights
- skills: flat names -> technical / tools / soft buckets
"""

from __future__ import annotations

import re
from typing import Iterable

from .models import Skills

MONTHS = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

CANONICAL_DATE_RE = re.compile(r"^\d{4}-(?:0[1-9]|1[0-2])$")
MONTH_YEAR_RE = re.compile(r"^(?P<month>[a-z]+)\.?\s+(?P<year>\d{4})$", re.I)
YEAR_RE = re.compile(r"^\d{4}$")

BULLET_RE = re.compile(r"^(?:[•\-*]|\d+[.)])\s*")

TECHNICAL_KEYWORDS = (
    "javascript",
    "typescript",
    "python",
    "java",
    "c++",
    "c#",
    "go",
    "rust",
    "ruby",
    "php",
    "swift",
    "kotlin",
    "scala",
    "sql",
    "html",
    "css",
    "react",
    "angular",
    "vue",
    "node",
    "django",
    "flask",
    "spring",
    ".net",
    "aws",
    "azure",
    "gcp",
    "docker",
    "kubernetes",
    "terraform",
    "graphql",
    "rest",
    "api",
    "git",
    "machine learning",
    "ai",
    "data science",
    "analytics",
    "algorithm",
    "database",
    "mongodb",
    "postgresql",
    "mysql",
    "redis",
    "elasticsearch",
    "devops",
    "ci/cd",
    "agile",
    "scrum",
    "microservices",
    "cloud",
    "linux",
    "unix",
    "networking",
    "security",
    "testing",
    "automation",
)

TOOL_KEYWORDS = (
    "github",
    "gitlab",
    "jira",
    "confluence",
    "slack",
    "figma",
    "sketch",
    "adobe",
    "photoshop",
    "illustrator",
    "xd",
    "invision",
    "vscode",
    "visual studio",
    "intellij",
    "eclipse",
    "jenkins",
    "circleci",
    "travis",
    "postman",
    "insomnia",
    "datadog",
    "splunk",
    "grafana",
    "tableau",
    "power bi",
    "excel",
    "notion",
    "trello",
    "asana",
    "monday",
    "salesforce",
    "hubspot",
    "zendesk",
    "intercom",
)

SOFT_KEYWORDS = (
    "leadership",
    "communication",
    "teamwork",
    "collaboration",
    "problem solving",
    "critical thinking",
    "creativity",
    "adaptability",
    "time management",
    "organization",
    "presentation",
    "negotiation",
    "conflict resolution",
    "mentoring",
    "coaching",
    "strategic",
    "planning",
    "decision making",
    "emotional intelligence",
    "empathy",
    "customer service",
    "public speaking",
    "writing",
    "research",
    "attention to detail",
    "multitasking",
    "flexibility",
    "initiative",
    "work ethic",
    "professionalism",
)


def normalize_date(value: str | None) -> str:
    if not value:
        return ""
    text = " ".join(str(value).split())
    if CANONICAL_DATE_RE.match(text):
        return text
    match = MONTH_YEAR_RE.match(text)
    if match:
        month = MONTHS.get(match.group("month").lower())
        return f"{match.group('year')}-{month:02d}" if month else ""
    if YEAR_RE.match(text):
        return f"{text}-01"
    return ""


def split_description(text: str | None) -> tuple[str, list[str]]:
    if not text:
        return "", []
    paragraphs: list[str] = []
    highlights: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if BULLET_RE.match(stripped):
            bullet = BULLET_RE.sub("", stripped, count=1).strip()
            if bullet:
                highlights.append(bullet)
        else:
            paragraphs.append(stripped)
    return " ".join(paragraphs), highlights


def compile_keywords(keywords: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    patterns = []
    for keyword in keywords:
        escaped = re.escape(keyword)
        # Short keywords ("go", "ai", "git") only count as standalone words.
        if len(keyword) <= 3:
            escaped = rf"(?<![a-z0-9]){escaped}(?![a-z0-9])"
        patterns.append(re.compile(escaped))
    return tuple(patterns)


SKILL_BUCKETS = (
    ("technical", compile_keywords(TECHNICAL_KEYWORDS)),
    ("tools", compile_keywords(TOOL_KEYWORDS)),
    ("soft", compile_keywords(SOFT_KEYWORDS)),
)


def skill_category(name: str) -> str:
    lowered = name.lower()
    for bucket, patterns in SKILL_BUCKETS:
        if any(pattern.search(lowered) for pattern in patterns):
            return bucket
    return "technical"


def categorize_skills(names: Iterable[str]) -> Skills:
    skills = Skills()
    seen: set[str] = set()
    for name in names:
        clean = (name or "").strip()
        if not clean or clean.lower() in seen:
            continue
        seen.add(clean.lower())
        getattr(skills, skill_category(clean)).append(clean)
    return skills
