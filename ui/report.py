import pandas as pd

from errors import ANALYSIS_FAILED


def score_color(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "orange"
    return "red"


def ats_color(compatibility: str) -> str:
    return {"high": "green", "medium": "orange", "low": "red"}.get(compatibility.lower(), "gray")


def skills_distribution(result: dict) -> pd.DataFrame:
    """Skill counts per proficiency level, with their share of the total."""
    prof = result["technical_proficiency"]
    df = pd.DataFrame({
        "Level": ["Strong", "Moderate", "Weak"],
        "Skills": [len(prof["strong"]), len(prof["moderate"]), len(prof["weak_or_missing"])],
    })
    total = df["Skills"].sum()
    df["Share (%)"] = (df["Skills"] / total * 100).round(0) if total else 0.0
    return df.set_index("Level")


def requirements_coverage(result: dict) -> pd.DataFrame:
    cov = result["job_requirements_coverage"]
    return pd.DataFrame(
        {"Met": [len(cov["met_requirements"])], "Missing": [len(cov["missing_requirements"])]},
        index=["Requirements"],
    )


def error_message(body) -> str:
    """User-facing message from an /analyze error response body."""
    if isinstance(body, dict):
        state = body.get("detail")
        if isinstance(state, dict) and state.get("message"):
            return state["message"]
    return ANALYSIS_FAILED
