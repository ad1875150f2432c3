"""Tests for the "Save to PDF" text heuristics.

Samples mimic what the document reader emits: sidebar first, a form feed
line, then the main column. The flattened samples have no line breaks at
all, as when text is copied out of a viewer.
"""

from __future__ import annotations

from linkedin_import.parser import (
    NAME_STRATEGIES,
    experience_from_flat,
    extract_document,
    find_name,
    find_phone,
    find_profile_links,
    flat_headline_and_location,
    is_name_candidate,
    name_after_break,
    name_after_honors,
    name_before_location,
    name_before_title,
    name_from_email,
    recover_certifications,
    recover_education,
    recover_experience,
    recover_languages,
    recover_skills,
    skills_from_flat,
)

SAMPLE = "\n".join(
    [
        "Contact",
        "jane.doe@example.com",
        "www.linkedin.com/in/janedoe (LinkedIn)",
        "Top Skills",
        "Python",
        "Kubernetes",
        "Team Leadership",
        "Languages",
        "English (Native or Bilingual)",
        "German (Limited Working)",
        "Certifications",
        "AWS Certified Solutions Architect",
        "\f",
        "Jane Doe",
        "Senior Software Engineer at Acme",
        "Berlin, Germany",
        "Summary",
        "Engineer who builds data platforms.",
        "Experience",
        "Acme Corp",
        "Senior Software Engineer",
        "January 2020 - Present (4 years)",
        "Berlin, Germany",
        "- Led migration to Kubernetes",
        "- Cut costs by 30%",
        "Globex",
        "Software Engineer",
        "June 2016 - December 2019 (3 years 7 months)",
        "Munich, Germany",
        "Built billing services.",
        "Education",
        "Technical University of Munich",
        "Master of Science, Computer Science · (2014 - 2016)",
    ]
)


def test_extract_document_line_mode() -> None:
    aggregate = extract_document(SAMPLE)

    profile = aggregate.profile
    assert (profile.first_name, profile.last_name) == ("Jane", "Doe")
    assert profile.headline == "Senior Software Engineer at Acme"
    assert profile.geo_location == "Berlin, Germany"
    assert profile.summary == "Engineer who builds data platforms."
    assert profile.websites == "https://www.linkedin.com/in/janedoe"
    assert [email.address for email in aggregate.emails] == ["jane.doe@example.com"]

    acme, globex = aggregate.positions
    assert (acme.company, acme.title) == ("Acme Corp", "Senior Software Engineer")
    assert (acme.started_on, acme.finished_on) == ("January 2020", "")
    assert acme.location == "Berlin, Germany"
    assert acme.description == "- Led migration to Kubernetes\n- Cut costs by 30%"
    assert (globex.company, globex.title) == ("Globex", "Software Engineer")
    assert globex.finished_on == "December 2019"
    assert globex.description == "Built billing services."

    school = aggregate.education[0]
    assert school.school == "Technical University of Munich"
    assert school.degree_name == "Master of Science, Computer Science"
    assert (school.start_date, school.end_date) == ("2014", "2016")

    assert [skill.name for skill in aggregate.skills] == ["Python", "Kubernetes", "Team Leadership"]
    assert [(lang.name, lang.proficiency) for lang in aggregate.languages] == [
        ("English", "Native or Bilingual"),
        ("German", "Limited Working"),
    ]
    assert [cert.name for cert in aggregate.certifications] == ["AWS Certified Solutions Architect"]


def test_extract_document_without_sections() -> None:
    aggregate = extract_document("Jane Doe\nSenior Engineer at Acme")
    assert aggregate.profile.first_name == "Jane"
    assert aggregate.positions is None
    assert aggregate.skills is None


def test_extract_document_empty() -> None:
    aggregate = extract_document("")
    assert not aggregate.has_primary_data


def test_name_candidates_reject_headings() -> None:
    assert is_name_candidate("Jane Doe")
    assert is_name_candidate("Marie-Claire O'Neil")
    assert not is_name_candidate("Top Skills")
    assert not is_name_candidate("Senior Engineer")
    assert not is_name_candidate("Jane")
    assert not is_name_candidate("Berlin, Germany")


def test_name_strategies_are_ordered() -> None:
    assert NAME_STRATEGIES[0] is name_before_title
    assert NAME_STRATEGIES[-1] is name_from_email


def test_name_before_title() -> None:
    assert name_before_title("Jane Doe\nStaff Engineer") == "Jane Doe"
    assert name_before_title("Jane Doe Staff Engineer at Acme") == "Jane Doe"


def test_name_after_break() -> None:
    assert name_after_break("Contact something\fJane Doe at Acme Corp") == "Jane Doe"


def test_name_before_location() -> None:
    assert name_before_location("Jane Doe\nBerlin, Germany") == "Jane Doe"
    assert name_before_location("Jane Doe Berlin, Berlin, Germany") == "Jane Doe"


def test_name_after_honors() -> None:
    assert name_after_honors("Honors-Awards\nJane Doe\nProduct Person") == "Jane Doe"
    assert name_after_honors("Honors-Awards Jane Doe Product Person") == "Jane Doe"


def test_name_from_email() -> None:
    text = "jane.doe@example.com Some Text Jane Doe builds things"
    assert name_from_email(text) == "Jane Doe"
    assert name_from_email("no address here Jane Doe") is None


def test_name_from_email_folds_accents() -> None:
    assert name_from_email("jose.nunez@example.com Jos\u00e9 N\u00fa\u00f1ez") == "Jos\u00e9 N\u00fa\u00f1ez"


def test_find_name_falls_back_to_email() -> None:
    assert find_name("contact jdoe@example.com - Jane Doe") == "Jane Doe"
    assert find_name("nothing useful here") == ""


def test_experience_flat_fallback() -> None:
    section = (
        "Acme Corp 4 years Senior Software Engineer January 2020 - Present (4 years) "
        "Berlin, Germany Globex 3 years Software Engineer June 2016 - December 2019 "
        "(3 years 7 months) Munich, Germany"
    )
    positions, found = experience_from_flat(section)
    assert found == 2
    assert [(p.company, p.title) for p in positions] == [
        ("Acme Corp", "Senior Software Engineer"),
        ("Globex", "Software Engineer"),
    ]
    assert positions[1].finished_on == "December 2019"
    assert recover_experience(section, line_mode=False) == positions


def test_experience_duration_line_keeps_company() -> None:
    section = "\n".join(
        [
            "Acme Corp",
            "5 years",
            "Engineering Manager",
            "January 2022 - Present (2 years)",
            "Senior Engineer",
            "March 2019 - December 2021 (2 years 10 months)",
        ]
    )
    positions = recover_experience(section, line_mode=True)
    assert [(p.company, p.title) for p in positions] == [
        ("Acme Corp", "Engineering Manager"),
        ("Acme Corp", "Senior Engineer"),
    ]


def test_education_flat_fallback() -> None:
    section = "Stanford University Master of Science, Computer Science · (2014 - 2016) MIT College Bachelor of Arts · (2010 - 2014)"
    records = recover_education(section, line_mode=False)
    assert [(r.school, r.degree_name) for r in records] == [
        ("Stanford University", "Master of Science, Computer Science"),
        ("MIT College", "Bachelor of Arts"),
    ]
    assert records[1].end_date == "2014"


def test_skills_positional_cascade() -> None:
    names, found = skills_from_flat("Python Machine-Learning Team Leadership")
    assert found == 3
    assert names == ["Python", "Machine-Learning", "Team Leadership"]


def test_skills_line_mode_takes_three() -> None:
    assert recover_skills("Python\nGo\nRust\nElixir", line_mode=True) == ["Python", "Go", "Rust"]


def test_certifications_flat_split() -> None:
    section = "Learning Python Python: Advanced Topics Docker: Deep Dive Jane Doe"
    assert recover_certifications(section, line_mode=False, name="Jane Doe") == [
        "Learning Python",
        "Python: Advanced Topics",
        "Docker: Deep Dive",
    ]


def test_languages_flat_and_fallback() -> None:
    records = recover_languages("English (Native or Bilingual) French (Elementary)", line_mode=False)
    assert [(r.name, r.proficiency) for r in records] == [
        ("English", "Native or Bilingual"),
        ("French", "Elementary"),
    ]
    plain = recover_languages("Spanish\nItalian", line_mode=False)
    assert [(r.name, r.proficiency) for r in plain] == [("Spanish", ""), ("Italian", "")]


def test_find_phone_ignores_urls() -> None:
    section = "www.linkedin.com/in/jane-doe-12345678 (LinkedIn)\n+49 30 1234567 (Mobile)"
    assert find_phone(section) == "+49 30 1234567"
    assert find_phone("www.linkedin.com/in/jane-doe-12345678 (LinkedIn)") == ""


def test_find_profile_links_joins_wrapped_urls() -> None:
    text = "www.linkedin.com/in/jane-doe- 1a2b3c (LinkedIn) github.com/janedoe (Portfolio) coursera.org/verify/ABC"
    assert find_profile_links(text) == [
        "https://www.linkedin.com/in/jane-doe-1a2b3c",
        "https://github.com/janedoe",
    ]


def test_single_column_text_keeps_name_out_of_certifications() -> None:
    """Without a column break the name runs on from the Certifications sidebar."""
    text = "\n".join(
        [
            "Contact",
            "www.linkedin.com/in/johndoe (LinkedIn)",
            "Top Skills",
            "Python",
            "Languages",
            "English (Native or Bilingual)",
            "Certifications",
            "AWS Certified Developer",
            "John Doe",
            "Senior Software Engineer at Acme",
            "San Francisco, California, United States",
            "Summary",
            "Builds things.",
            "Experience",
            "Acme",
            "Senior Software Engineer",
            "January 2020 - Present (4 years)",
            "Education",
            "Stanford University",
            "Bachelor of Science, Computer Science · (2010 - 2014)",
        ]
    )
    assert find_name(text) == "John Doe"

    aggregate = extract_document(text)
    assert [cert.name for cert in aggregate.certifications] == ["AWS Certified Developer"]
    assert aggregate.profile.headline == "Senior Software Engineer at Acme"
    assert aggregate.profile.geo_location == "San Francisco, California, United States"


def test_flat_headline_keeps_company_after_at() -> None:
    flat = (
        "Jane Doe Senior Software Engineer at Acme San Francisco, California, United States "
        "Summary Builds things."
    )
    assert flat_headline_and_location(flat, "Jane Doe") == (
        "Senior Software Engineer at Acme",
        "San Francisco, California, United States",
    )
    assert flat_headline_and_location("Jane Doe Engineer at Acme Berlin, Germany", "Jane Doe") == (
        "Engineer at Acme",
        "Berlin, Germany",
    )
