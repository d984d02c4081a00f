"""Skill extraction by vocabulary matching.

Scans resume text for a fixed list of skill terms. The default "substring"
mode matches a term anywhere in the text, so "Java" is found inside
"JavaScript" and "AI" inside "maintained". The "word" mode rejects matches
flanked by letters or digits.
"""

import re

from config import settings

# Fixed skill vocabulary, in reporting order
SKILL_KEYWORDS: tuple[str, ...] = (
    "JavaScript", "TypeScript", "React", "Node.js", "Python", "Java", "C++",
    "SQL", "MongoDB", "AWS", "Docker", "Kubernetes", "Git", "Agile", "Scrum",
    "Machine Learning", "AI", "Data Science", "UI/UX", "API", "REST", "GraphQL",
)

MATCH_MODES = ("substring", "word")


def contains_keyword(text: str, keyword: str, mode: str | None = None) -> bool:
    """Case-insensitive containment check used for skills and job requirements."""
    mode = mode or settings.keyword_match_mode
    if mode not in MATCH_MODES:
        raise ValueError(f"Unknown keyword match mode: {mode}")

    text_lower = text.lower()
    keyword_lower = keyword.lower()
    if mode == "substring":
        return keyword_lower in text_lower

    escaped = re.escape(keyword_lower)
    return re.search(rf"(?<![a-z0-9]){escaped}(?![a-z0-9])", text_lower) is not None


def extract_skills(resume_text: str, mode: str | None = None) -> list[str]:
    """Return the vocabulary terms present in the text, in vocabulary order."""
    return [skill for skill in SKILL_KEYWORDS if contains_keyword(resume_text, skill, mode)]
