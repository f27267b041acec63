from __future__ import annotations
import logging
from typing import Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import config
from errors import ErrorKind, SERVICE_KINDS
from matching.analyzer import ResumeAnalyzer
from schemas import AnalysisResult, AnalysisState, AnalysisStatus

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

analyzer = ResumeAnalyzer()

STATUS_CODES = {
    ErrorKind.MISSING_INPUT: 400,
    ErrorKind.BUSY: 409,
    ErrorKind.EMPTY_DOCUMENT: 422,
    ErrorKind.RATE_LIMIT: 429,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Using model: {config.MODEL_NAME}")
    if not config.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY is not set; analyses will fail with an auth error")
    yield
    logger.info("Application shutting down.")


app = FastAPI(title="ATSight AI Resume Analyzer (Groq Cloud)", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # OK for demo — restrict for prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _status_code(kind: ErrorKind) -> int:
    if kind in STATUS_CODES:
        return STATUS_CODES[kind]
    # service and validation failures both mean the upstream answer was unusable
    return 502


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.post("/analyze", response_model=AnalysisResult)
def analyze_resume(
    resume: Optional[UploadFile] = File(None),
    job_description: str = Form(""),
):
    """Analyze an uploaded resume PDF against a job description."""
    document = resume.file.read() if resume is not None else None
    state = analyzer.run(document, job_description)

    if state.status == AnalysisStatus.SUCCESS:
        return state.result

    kind = state.error.kind
    if kind in SERVICE_KINDS:
        logger.error(f"Completion service failure: {kind.value}")
    raise HTTPException(status_code=_status_code(kind), detail=state.model_dump(mode="json"))


@app.get("/analysis", response_model=AnalysisState)
def current_analysis():
    """Return the state of the latest analysis run."""
    return analyzer.state


@app.get("/health", response_model=dict)
def health():
    return {"status": "ok", "model": config.MODEL_NAME}
