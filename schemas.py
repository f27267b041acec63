import math
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr, field_validator

from errors import ErrorKind


class Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# Allowed values for the enum fields of the analysis
class AtsCompatibility(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ResumeLength(str, Enum):
    TOO_SHORT = "Too Short"
    OPTIMAL = "Optimal"
    TOO_LONG = "Too Long"


class ToneOfLanguage(str, Enum):
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    NEUTRAL = "Neutral"
    AGGRESSIVE = "Aggressive"


# Input of one analysis run
class AnalysisRequest(Frozen):
    resume_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)


def _clamp_score(value):
    # Scores are advisory: out-of-range values are pulled into [0, 100]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("must be a finite number")
    return max(0, min(100, value))


def _casefold(enum_cls):
    def lookup(value):
        if isinstance(value, str):
            wanted = value.strip().casefold()
            for member in enum_cls:
                if member.value.casefold() == wanted:
                    return member
        return value
    return BeforeValidator(lookup)


Score = Annotated[float, BeforeValidator(_clamp_score)]
TextList = List[StrictStr]


# Nested sections of the analysis
class SkillsMatch(Frozen):
    matched: TextList
    missing: TextList
    match_percentage: Score


class SoftSkillsMatch(Frozen):
    matched: TextList
    missing: TextList


class TechnicalProficiency(Frozen):
    strong: TextList
    moderate: TextList
    weak_or_missing: TextList


class KeywordsAnalysis(Frozen):
    present_keywords: TextList
    missing_keywords: TextList


class JobRequirementsCoverage(Frozen):
    met_requirements: TextList
    missing_requirements: TextList


class ExperienceAlignment(Frozen):
    aligned_experience: TextList
    missing_experience_areas: TextList


# Validated reply of the completion service; field order is the order errors are reported in
class AnalysisResult(Frozen):
    overall_summary: StrictStr
    resume_score: Score
    ats_compatibility: Annotated[AtsCompatibility, _casefold(AtsCompatibility)]
    resume_length: Annotated[ResumeLength, _casefold(ResumeLength)]
    readability_score: Score
    skills_match: SkillsMatch
    soft_skills_match: SoftSkillsMatch
    technical_proficiency: TechnicalProficiency
    keywords_analysis: KeywordsAnalysis
    job_requirements_coverage: JobRequirementsCoverage
    experience_alignment: ExperienceAlignment
    tone_of_language: Annotated[ToneOfLanguage, _casefold(ToneOfLanguage)]
    formatting_issues: TextList
    grammar_issues: TextList
    recommendations: TextList

    @field_validator("overall_summary")
    @classmethod
    def summary_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value


# Lifecycle of the analyzer
class AnalysisStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class AnalysisFailure(Frozen):
    kind: ErrorKind
    message: str
    field: Optional[str] = None


class AnalysisState(Frozen):
    status: AnalysisStatus = AnalysisStatus.IDLE
    result: Optional[AnalysisResult] = None
    error: Optional[AnalysisFailure] = None
    message: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
