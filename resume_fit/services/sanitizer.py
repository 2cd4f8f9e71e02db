"""Coerce raw model output into a strict ``AnalysisResult``.

The model is asked for a JSON schema but nothing guarantees it honours it, so
every field is read defensively and replaced with a safe default when it is
missing, mistyped or out of range. ``sanitize`` never raises.
"""
from __future__ import annotations

import math
from typing import Any

from resume_fit.schemas.analysis import (
    PRIORITIES,
    SKILL_CATEGORIES,
    AnalysisResult,
    MissingSkill,
    OptimizedResume,
    Suggestion,
    UntrustedJSON,
)

DEFAULT_PRIORITY = "medium"
DEFAULT_CATEGORY = "technical"

UNKNOWN_SKILL = "Unknown Skill"
SUMMARY_PLACEHOLDER = "Professional summary not available"
SKILLS_PLACEHOLDER = "Skills section not available"
EXPERIENCE_PLACEHOLDER = "Experience section not available"
SUGGESTION_TITLE_PLACEHOLDER = "Improvement Suggestion"
SUGGESTION_DESCRIPTION_PLACEHOLDER = "No description available"


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _score(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, int):
        return max(0, min(100, value))
    if not math.isfinite(value):
        return 0
    clamped = max(0.0, min(100.0, value))
    return int(math.floor(clamped + 0.5))


def _text(value: Any, placeholder: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return placeholder


def _enum(value: Any, allowed: tuple[str, ...], default: str) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in allowed:
            return candidate
    return default


def _missing_skill(raw: Any) -> MissingSkill:
    item = _as_dict(raw)
    return MissingSkill(
        skill=_text(item.get("skill"), UNKNOWN_SKILL),
        priority=_enum(item.get("priority"), PRIORITIES, DEFAULT_PRIORITY),
        category=_enum(item.get("category"), SKILL_CATEGORIES, DEFAULT_CATEGORY),
    )


def _suggestion(raw: Any) -> Suggestion:
    item = _as_dict(raw)
    return Suggestion(
        title=_text(item.get("title"), SUGGESTION_TITLE_PLACEHOLDER),
        description=_text(item.get("description"), SUGGESTION_DESCRIPTION_PLACEHOLDER),
        priority=_enum(item.get("priority"), PRIORITIES, DEFAULT_PRIORITY),
    )


def _optimized_resume(raw: Any) -> OptimizedResume:
    section = _as_dict(raw)
    education = section.get("education")
    certifications = section.get("certifications")
    return OptimizedResume(
        summary=_text(section.get("summary"), SUMMARY_PLACEHOLDER),
        skills=_text(section.get("skills"), SKILLS_PLACEHOLDER),
        experience=_text(section.get("experience"), EXPERIENCE_PLACEHOLDER),
        education=education if isinstance(education, str) else "",
        certifications=certifications if isinstance(certifications, str) else "",
    )


def sanitize(raw: UntrustedJSON) -> AnalysisResult:
    data = _as_dict(raw)
    return AnalysisResult(
        match_score=_score(data.get("matchScore")),
        skills_match=_score(data.get("skillsMatch")),
        experience_match=_score(data.get("experienceMatch")),
        missing_skills=[_missing_skill(item) for item in _as_list(data.get("missingSkills"))],
        optimized_resume=_optimized_resume(data.get("optimizedResume")),
        suggestions=[_suggestion(item) for item in _as_list(data.get("suggestions"))],
    )
