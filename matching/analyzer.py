import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from errors import AnalysisError, ErrorKind, user_message
from parsers.pdf import pdf_to_text
from schemas import AnalysisFailure, AnalysisRequest, AnalysisResult, AnalysisState, AnalysisStatus
from .llm_groq import complete
from .prompts import build_prompt
from .validator import parse_analysis

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Analysis complete!"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _failed(kind: ErrorKind, detail: str = "", field: Optional[str] = None, started_at=None) -> AnalysisState:
    return AnalysisState(
        status=AnalysisStatus.FAILED,
        error=AnalysisFailure(kind=kind, message=detail or kind.value, field=field),
        message=user_message(kind),
        started_at=started_at,
        finished_at=_now(),
    )


class ResumeAnalyzer:
    """
    Runs the resume analysis pipeline: extract -> prompt -> completion -> validation.

    At most one run is in flight per analyzer. A run requested while another is
    running is answered with a BUSY failure and leaves the current state alone.
    ``run`` never raises; every outcome is published as an AnalysisState.
    """

    def __init__(
        self,
        extract: Callable[..., str] = pdf_to_text,
        client: Callable[[str], str] = complete,
        build: Callable[[str, str], str] = build_prompt,
        parse: Callable[[str], AnalysisResult] = parse_analysis,
    ):
        self._extract = extract
        self._client = client
        self._build = build
        self._parse = parse
        self._lock = threading.Lock()
        self._state = AnalysisState()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def run(self, document, job_description: Optional[str]) -> AnalysisState:
        if not self._lock.acquire(blocking=False):
            logger.info("Analysis rejected: another run is in progress")
            return _failed(ErrorKind.BUSY, "analysis already in progress")

        try:
            started_at = _now()
            self._state = AnalysisState(status=AnalysisStatus.RUNNING, started_at=started_at)
            self._state = self._execute(document, job_description, started_at)
            return self._state
        finally:
            self._lock.release()

    def _execute(self, document, job_description, started_at) -> AnalysisState:
        t0 = time.perf_counter()
        if not document or not job_description or not job_description.strip():
            logger.info("Analysis rejected: resume or job description missing")
            return _failed(ErrorKind.MISSING_INPUT, "resume and job description are required",
                           started_at=started_at)

        logger.info("Analysis started")
        try:
            resume_text = self._extract(document)
            if not resume_text or not resume_text.strip():
                logger.warning("Analysis failed: no text could be extracted from the resume")
                return _failed(ErrorKind.EMPTY_DOCUMENT, "no text extracted from resume",
                               started_at=started_at)

            request = AnalysisRequest(resume_text=resume_text, job_description=job_description)
            prompt = self._build(request.resume_text, request.job_description)
            raw = self._client(prompt)
            result = self._parse(raw)
        except AnalysisError as e:
            logger.warning(f"Analysis failed: kind={e.kind.value}, field={e.field}, error={e}")
            return _failed(e.kind, str(e), field=e.field, started_at=started_at)
        except Exception as e:
            logger.exception("Analysis failed unexpectedly")
            return _failed(ErrorKind.UNKNOWN, str(e), started_at=started_at)

        logger.info(f"Analysis finished in {time.perf_counter() - t0:.2f}s")
        return AnalysisState(
            status=AnalysisStatus.SUCCESS,
            result=result,
            message=SUCCESS_MESSAGE,
            started_at=started_at,
            finished_at=_now(),
        )
