ANALYSIS_PROMPT = """You are an AI Resume Analyzer designed to help job seekers improve their resumes.
Analyze the following resume against the provided job description and return a response in strict JSON format as per the schema below.
Give detailed recommendations and insights based on the analysis.
Analyze the resume STRICTLY based on the job description.

Respond ONLY with the JSON object.

Schema:
{schema}

Resume:
{resume}

Job Description:
{jd}
"""

# Literal contract the service must honor; keep in sync with schemas.AnalysisResult.
RESPONSE_SCHEMA = """{
  "overall_summary": string,
  "resume_score": number (0 to 100),
  "ats_compatibility": "High" | "Medium" | "Low",
  "resume_length": "Too Short" | "Optimal" | "Too Long",
  "readability_score": number (0 to 100),
  "skills_match": {
    "matched": string[],
    "missing": string[],
    "match_percentage": number (0 to 100)
  },
  "soft_skills_match": {
    "matched": string[],
    "missing": string[]
  },
  "technical_proficiency": {
    "strong": string[],
    "moderate": string[],
    "weak_or_missing": string[]
  },
  "keywords_analysis": {
    "present_keywords": string[],
    "missing_keywords": string[]
  },
  "job_requirements_coverage": {
    "met_requirements": string[],
    "missing_requirements": string[]
  },
  "experience_alignment": {
    "aligned_experience": string[],
    "missing_experience_areas": string[]
  },
  "tone_of_language": "Professional" | "Casual" | "Neutral" | "Aggressive",
  "formatting_issues": string[],
  "grammar_issues": string[],
  "recommendations": string[]
}"""


def build_prompt(resume_text: str, job_description: str) -> str:
    """Assemble the analysis instruction. Inputs are interpolated verbatim."""
    return ANALYSIS_PROMPT.format(schema=RESPONSE_SCHEMA, resume=resume_text, jd=job_description)
