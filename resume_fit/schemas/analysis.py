from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Priority = Literal["high", "medium", "low"]
SkillCategory = Literal["technical", "soft"]

# Raw, unvalidated model output. Only the sanitizer turns this into an AnalysisResult.
UntrustedJSON = Any

PRIORITIES: tuple[str, ...] = ("high", "medium", "low")
SKILL_CATEGORIES: tuple[str, ...] = ("technical", "soft")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MissingSkill(CamelModel):
    skill: str
    priority: Priority = "medium"
    category: SkillCategory = "technical"


class OptimizedResume(CamelModel):
    summary: str = Field(min_length=1)
    skills: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    education: str = ""
    certifications: str = ""


class Suggestion(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: Priority = "medium"


class AnalysisResult(CamelModel):
    match_score: int = Field(ge=0, le=100)
    skills_match: int = Field(ge=0, le=100)
    experience_match: int = Field(ge=0, le=100)
    missing_skills: list[MissingSkill] = Field(default_factory=list)
    optimized_resume: OptimizedResume
    suggestions: list[Suggestion] = Field(default_factory=list)


class ResumeAnalysisRequest(CamelModel):
    resume_text: str = Field(min_length=1, max_length=100000)
    job_description: str = Field(min_length=1, max_length=50000)

    @field_validator("resume_text")
    @classmethod
    def _require_resume_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Resume text is required")
        return value

    @field_validator("job_description")
    @classmethod
    def _require_job_description(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Job description is required")
        return value


class AnalyzeResumeResponse(CamelModel):
    success: bool = True
    analysis: AnalysisResult


class UploadResumeResponse(CamelModel):
    success: bool = True
    extracted_text: str
    filename: str
    size: int = Field(ge=0)


class HealthResponse(CamelModel):
    status: Literal["ok"] = "ok"
    timestamp: str
