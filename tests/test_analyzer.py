import json
import sys
import threading
from unittest.mock import MagicMock

import pytest

from errors import ErrorKind, ResultValidationError, ServiceError
from matching.analyzer import ResumeAnalyzer
from schemas import AnalysisStatus

RESUME_TEXT = "Experienced Go developer, 5 years, AWS, Docker"
JOB = "Seeking backend engineer with Go, Kubernetes, AWS experience"


@pytest.fixture
def client(raw_reply):
    return MagicMock(return_value=raw_reply)


@pytest.fixture
def extract():
    return MagicMock(return_value=RESUME_TEXT)


@pytest.fixture
def analyzer(extract, client):
    return ResumeAnalyzer(extract=extract, client=client)


def test_starts_idle(analyzer):
    assert analyzer.state.status == AnalysisStatus.IDLE
    assert analyzer.state.result is None
    assert analyzer.state.error is None


def test_successful_run_publishes_result(analyzer, extract, client, payload):
    state = analyzer.run(b"%PDF-1.7 ...", JOB)

    assert state.status == AnalysisStatus.SUCCESS
    assert state.error is None
    assert state.message == "Analysis complete!"
    assert state.result.model_dump(mode="json") == payload
    assert analyzer.state == state
    extract.assert_called_once_with(b"%PDF-1.7 ...")
    prompt = client.call_args.args[0]
    assert RESUME_TEXT in prompt and JOB in prompt


def test_skill_arrays_surface_unmodified(extract, payload):
    payload["skills_match"]["matched"] = ["Go", "AWS"]
    payload["skills_match"]["missing"] = ["Kubernetes", "Docker handling mismatch? no"]
    analyzer = ResumeAnalyzer(extract=extract, client=MagicMock(return_value=json.dumps(payload)))

    state = analyzer.run(b"pdf", JOB)

    assert state.status == AnalysisStatus.SUCCESS
    assert state.result.skills_match.matched == ["Go", "AWS"]
    assert state.result.skills_match.missing == ["Kubernetes", "Docker handling mismatch? no"]


@pytest.mark.parametrize("document, job", [
    (None, JOB),
    (b"", JOB),
    (b"pdf", ""),
    (b"pdf", "   \n"),
    (b"pdf", None),
])
def test_missing_input_skips_every_stage(analyzer, extract, client, document, job):
    state = analyzer.run(document, job)

    assert state.status == AnalysisStatus.FAILED
    assert state.error.kind == ErrorKind.MISSING_INPUT
    assert state.message == "Please upload a resume and provide a job description."
    extract.assert_not_called()
    assert client.call_count == 0


@pytest.mark.parametrize("text", ["", "  \n\t "])
def test_empty_document_never_calls_service(client, text):
    analyzer = ResumeAnalyzer(extract=MagicMock(return_value=text), client=client)

    state = analyzer.run(b"scanned.pdf", JOB)

    assert state.status == AnalysisStatus.FAILED
    assert state.error.kind == ErrorKind.EMPTY_DOCUMENT
    assert state.message.startswith("Failed to scan resume")
    assert client.call_count == 0


@pytest.mark.parametrize("kind", [ErrorKind.NETWORK, ErrorKind.AUTH, ErrorKind.RATE_LIMIT])
def test_service_errors_become_failed_state(extract, kind):
    analyzer = ResumeAnalyzer(extract=extract, client=MagicMock(side_effect=ServiceError(kind, "boom")))

    state = analyzer.run(b"pdf", JOB)

    assert state.status == AnalysisStatus.FAILED
    assert state.error.kind == kind
    assert state.result is None
    assert state.message == "Failed to analyze resume. Please try again."


def test_validation_error_keeps_field(extract, payload):
    del payload["overall_summary"]
    analyzer = ResumeAnalyzer(extract=extract, client=MagicMock(return_value=json.dumps(payload)))

    state = analyzer.run(b"pdf", JOB)

    assert state.error.kind == ErrorKind.SCHEMA_MISMATCH
    assert state.error.field == "overall_summary"
    assert state.result is None


def test_unexpected_exception_does_not_escape(client):
    analyzer = ResumeAnalyzer(extract=MagicMock(side_effect=KeyError("x")), client=client)

    state = analyzer.run(b"pdf", JOB)

    assert state.status == AnalysisStatus.FAILED
    assert state.error.kind == ErrorKind.UNKNOWN
    assert client.call_count == 0


def test_new_run_replaces_previous_terminal_state(extract, raw_reply):
    client = MagicMock(side_effect=[ServiceError(ErrorKind.SERVER_ERROR, "503"), raw_reply])
    analyzer = ResumeAnalyzer(extract=extract, client=client)

    assert analyzer.run(b"pdf", JOB).status == AnalysisStatus.FAILED
    state = analyzer.run(b"pdf", JOB)

    assert state.status == AnalysisStatus.SUCCESS
    assert state.error is None
    assert analyzer.state is state


def test_second_run_while_running_is_busy(extract, raw_reply):
    entered = threading.Event()
    release = threading.Event()

    def slow_client(prompt):
        entered.set()
        release.wait(timeout=5)
        return raw_reply

    analyzer = ResumeAnalyzer(extract=extract, client=slow_client)
    results = {}
    worker = threading.Thread(target=lambda: results.setdefault("first", analyzer.run(b"pdf", JOB)))
    worker.start()
    assert entered.wait(timeout=5)

    assert analyzer.state.status == AnalysisStatus.RUNNING
    busy = analyzer.run(b"other.pdf", JOB)
    assert busy.status == AnalysisStatus.FAILED
    assert busy.error.kind == ErrorKind.BUSY
    assert analyzer.state.status == AnalysisStatus.RUNNING

    release.set()
    worker.join(timeout=5)

    assert results["first"].status == AnalysisStatus.SUCCESS
    assert analyzer.state == results["first"]
    assert extract.call_count == 1


def test_validation_errors_from_custom_parser(extract, client):
    parse = MagicMock(side_effect=ResultValidationError(ErrorKind.MALFORMED, "bad json"))
    analyzer = ResumeAnalyzer(extract=extract, client=client, parse=parse)

    state = analyzer.run(b"pdf", JOB)

    assert state.error.kind == ErrorKind.MALFORMED
    parse.assert_called_once()


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no integer digit limit")
def test_overlong_number_in_reply_is_a_validation_failure(extract, raw_reply):
    raw = raw_reply.replace('"resume_score": 72', '"resume_score": 1' + "0" * 5000)
    analyzer = ResumeAnalyzer(extract=extract, client=MagicMock(return_value=raw))

    state = analyzer.run(b"pdf", JOB)

    assert state.status == AnalysisStatus.FAILED
    assert state.error.kind == ErrorKind.MALFORMED
