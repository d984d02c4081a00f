from models.schemas import Job
from services.resume_analyzer import (
    DEFAULT_EXPERIENCE_YEARS,
    analyze_resume,
    calculate_match_score,
    extract_experience,
    extract_highlights,
)


SAMPLE_RESUME = """Jane Doe
Backend engineer with 5+ years of experience in Python and SQL.

Experience
Senior Engineer | DataCorp | 2019-2023
• Built REST APIs serving 1M requests/day
• Migrated services to Docker and Kubernetes
short line
Engineer | WebShop | 2016-2019
• Maintained the JavaScript checkout frontend
"""


def _job(requirements: list[str]) -> Job:
    return Job(id="j1", recruiter_id="r1", title="Engineer", company="Acme", requirements=requirements)


# --- Experience ---


def test_extract_experience_plus_years():
    assert extract_experience("5+ years of experience") == 5


def test_extract_experience_uses_first_mention():
    assert extract_experience("3 years at A, then 7 years at B") == 3


def test_extract_experience_singular_and_no_space():
    assert extract_experience("1 year in support") == 1
    assert extract_experience("10years building compilers") == 10


def test_extract_experience_default():
    assert extract_experience("Recent graduate, eager to learn") == DEFAULT_EXPERIENCE_YEARS == 2


# --- Highlights ---


def test_extract_highlights_skips_short_lines():
    highlights = extract_highlights(SAMPLE_RESUME)
    assert "Jane Doe" not in highlights
    assert "short line" not in highlights
    assert "Experience" not in highlights


def test_extract_highlights_at_most_five_in_order():
    highlights = extract_highlights(SAMPLE_RESUME)
    assert len(highlights) == 5
    assert highlights[0].startswith("Backend engineer with 5+ years")
    assert highlights[1] == "Senior Engineer | DataCorp | 2019-2023"


def test_extract_highlights_length_threshold_is_exclusive():
    exactly_20 = "x" * 20
    twenty_one = "y" * 21
    assert extract_highlights(f"{exactly_20}\n{twenty_one}") == [twenty_one]


def test_extract_highlights_keeps_line_as_written():
    indented = "    Led migration of billing to event sourcing  "
    padded = "  " + "z" * 19 + "  "
    assert extract_highlights(f"{indented}\n{padded}") == [indented]


def test_extract_highlights_empty():
    assert extract_highlights("") == []


# --- Match score ---


def test_match_score_no_requirements():
    assert calculate_match_score(SAMPLE_RESUME, []) == 50


def test_match_score_adds_bonus_per_requirement():
    assert calculate_match_score(SAMPLE_RESUME, ["python", "Haskell"]) == 60
    assert calculate_match_score(SAMPLE_RESUME, ["Python", "Docker", "Kubernetes"]) == 80


def test_match_score_capped():
    requirements = ["Python", "SQL", "REST", "Docker", "Kubernetes", "JavaScript"]
    assert calculate_match_score(SAMPLE_RESUME, requirements) == 95


def test_match_score_counts_overlapping_requirements_independently():
    assert calculate_match_score("PostgreSQL expert", ["SQL", "PostgreSQL"]) == 70


def test_analyze_resume_fields():
    analysis = analyze_resume(SAMPLE_RESUME, _job(["Python"]))
    assert analysis.experience_years == 5
    assert analysis.match_score == 60
    assert "Python" in analysis.skills_extracted
    assert analysis.languages_detected == ["English"]
    assert analysis.original_language == "en"
    assert len(analysis.key_highlights) <= 5


def test_analyze_resume_is_pure():
    job = _job(["Python", "Go"])
    assert analyze_resume(SAMPLE_RESUME, job) == analyze_resume(SAMPLE_RESUME, job)
