import copy
import json

import pytest

PAYLOAD = {
    "overall_summary": "Solid backend profile with gaps in container orchestration.",
    "resume_score": 72,
    "ats_compatibility": "High",
    "resume_length": "Optimal",
    "readability_score": 81.5,
    "skills_match": {
        "matched": ["Go", "AWS"],
        "missing": ["Kubernetes"],
        "match_percentage": 66,
    },
    "soft_skills_match": {"matched": ["Communication"], "missing": ["Mentoring"]},
    "technical_proficiency": {
        "strong": ["Go"],
        "moderate": ["AWS", "Docker"],
        "weak_or_missing": ["Kubernetes"],
    },
    "keywords_analysis": {
        "present_keywords": ["backend", "AWS"],
        "missing_keywords": ["Kubernetes"],
    },
    "job_requirements_coverage": {
        "met_requirements": ["Go experience", "AWS experience"],
        "missing_requirements": ["Kubernetes experience"],
    },
    "experience_alignment": {
        "aligned_experience": ["5 years of Go development"],
        "missing_experience_areas": ["Cluster operations"],
    },
    "tone_of_language": "Professional",
    "formatting_issues": [],
    "grammar_issues": ["Inconsistent tense in the summary"],
    "recommendations": ["Add Kubernetes projects", "Quantify AWS cost savings"],
}


@pytest.fixture
def payload():
    """A fresh, schema-conformant analysis reply."""
    return copy.deepcopy(PAYLOAD)


@pytest.fixture
def raw_reply(payload):
    return json.dumps(payload)
