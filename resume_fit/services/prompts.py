from __future__ import annotations

from typing import Any

SYSTEM_PROMPT = """You are an expert resume tailoring and career insights assistant. Help a job seeker \
optimize their resume for a specific job description without fabricating any experience. Analyze both \
documents, score the match, identify gaps, and rewrite the resume sections to align with the job.

RULES:
- Never invent experiences, employers, degrees, certifications or metrics.
- Every statement in the rewritten resume must be derivable from the original resume.
- Mention a missing skill in the rewrite only if the resume already implies it.
- Keep a professional tone; prefer strong action verbs and quantified results that already exist.

STEPS:
1. Extract the key skills, tools, responsibilities and keywords from the job description.
2. Compare them with the resume content.
3. Score the overall match, the skills match and the experience match from 0 to 100.
4. List missing or under-represented skills, each as technical or soft, with a priority.
5. Rewrite the resume sections and list concrete improvement suggestions with priorities.

Respond only with JSON that follows the requested schema."""

USER_PROMPT_TEMPLATE = """RESUME CONTENT:
{resume_text}

JOB DESCRIPTION:
{job_description}

Analyze the resume against the job description and provide:
1. Match scores (0-100) for overall match, skills match and experience match.
2. Missing skills categorized as technical or soft, with priority high, medium or low.
3. Optimized resume sections: summary, skills, experience, education, certifications.
4. Improvement suggestions with priority high, medium or low.

Focus on authentic improvements that highlight existing relevant experience and skills."""

_PRIORITY = {"type": "string", "enum": ["high", "medium", "low"]}
_SCORE = {"type": "number", "minimum": 0, "maximum": 100}

ANALYSIS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "matchScore": _SCORE,
        "skillsMatch": _SCORE,
        "experienceMatch": _SCORE,
        "missingSkills": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "skill": {"type": "string"},
                    "priority": _PRIORITY,
                    "category": {"type": "string", "enum": ["technical", "soft"]},
                },
                "required": ["skill", "priority", "category"],
            },
        },
        "optimizedResume": {
            "type": "object",
            "properties": {
                "summary": {"type": "string"},
                "skills": {"type": "string"},
                "experience": {"type": "string"},
                "education": {"type": "string"},
                "certifications": {"type": "string"},
            },
            "required": ["summary", "skills", "experience"],
        },
        "suggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "priority": _PRIORITY,
                },
                "required": ["title", "description", "priority"],
            },
        },
    },
    "required": [
        "matchScore",
        "skillsMatch",
        "experienceMatch",
        "missingSkills",
        "optimizedResume",
        "suggestions",
    ],
}


def build_user_prompt(resume_text: str, job_description: str) -> str:
    return USER_PROMPT_TEMPLATE.format(
        resume_text=resume_text.strip(),
        job_description=job_description.strip(),
    )
