from datetime import date

from sections import extract_entities, extract_experience, split_resume_into_sections


def test_split_sample_resume(sample_resume):
    sections = split_resume_into_sections(sample_resume)
    assert sections.skills == "Python, Docker, Kubernetes, AWS, PostgreSQL, Terraform"
    assert sections.education.startswith("B.Tech in Computer Science")
    assert sections.experience.splitlines()[0] == "Backend Engineer, Acme Corp  Jan 2019 - Dec 2022"
    assert sections.projects == ""


def test_inline_heading_and_body_text():
    text = (
        "Summary\n"
        "Experience with Python and AWS across several teams.\n"
        "Skills: Python, AWS\n"
        "## Projects ##\n"
        "Resume scorer\n"
    )
    sections = split_resume_into_sections(text)
    assert sections.experience == ""
    assert sections.skills == "Python, AWS"
    assert sections.projects == "Resume scorer"


def test_split_empty_text():
    assert split_resume_into_sections(None).to_dict() == {
        "experience": "",
        "education": "",
        "skills": "",
        "projects": "",
    }


def test_extract_entities(sample_resume):
    entities = extract_entities(sample_resume)
    assert entities.emails == ["jane@example.com"]
    assert len(entities.phones) == 1
    assert extract_entities("").to_dict() == {"emails": [], "phones": []}


def test_experience_blocks_and_total():
    data = extract_experience(
        "Backend Engineer, Acme Corp  Jan 2019 - Dec 2022\n"
        "- Built services\n"
        "Intern | Startup | 2018 - 2018\n"
        "- Wrote tests\n"
    )
    assert [block.title for block in data.blocks] == ["Backend Engineer, Acme Corp", "Intern | Startup"]
    first = data.blocks[0]
    assert (first.start, first.end, first.duration_months) == ("2019-01", "2022-12", 48)
    assert first.description == "- Built services"
    assert data.total_experience_years == 5.0


def test_overlapping_roles_count_once():
    data = extract_experience("Role A Jan 2020 - Dec 2020\nRole B Jun 2020 - Jun 2021\n")
    assert data.total_experience_years == 1.5


def test_present_marker_uses_today():
    data = extract_experience("Engineer  Mar 2023 – Present", today=date(2024, 6, 15))
    block = data.blocks[0]
    assert block.end == "Present"
    assert block.duration_months == 16
    assert data.total_experience_years == 1.3


def test_text_without_dates_has_no_experience():
    data = extract_experience("Worked on many things")
    assert data.total_experience_years == 0.0
    assert data.blocks == []


def test_compact_year_ranges_are_not_phone_numbers():
    text = "Engineer, Acme 2019-2021\nBSc 2014-2018\nIntern 2013 2014\nCall +1 555-123-4567"
    assert extract_entities(text).phones == ["+1 555-123-4567"]
    assert extract_entities("Engineer, Acme 2019-2021").phones == []
