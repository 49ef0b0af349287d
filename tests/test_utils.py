import requests

from app.utils import series_frame, split_analysis_sections, validate_gemini_key


class DummyResponse:
    def __init__(self, status_code):
        self.status_code = status_code


# ─────────────────────────────────────────────────────────────────────────────
# Gemini key validation
# ─────────────────────────────────────────────────────────────────────────────
def test_validate_success(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: DummyResponse(200))
    valid, msg, warn = validate_gemini_key("AI" + "za" + "ValidKey")
    assert valid is True
    assert "ready" in msg
    assert warn is False


def test_validate_invalid_format():
    valid, msg, warn = validate_gemini_key("BadKey")
    assert valid is False
    assert "Invalid key format" in msg
    assert warn is False


def test_validate_rejects_line_breaks():
    valid, msg, _ = validate_gemini_key("AIza\nInjected")
    assert valid is False
    assert "line-break" in msg


def test_validate_401(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: DummyResponse(401))
    valid, msg, warn = validate_gemini_key("AI" + "za" + "Whatever")
    assert valid is False
    assert "Invalid API key" in msg


def test_validate_timeout(monkeypatch):
    def raiser(*args, **kwargs):
        raise requests.exceptions.Timeout()
    monkeypatch.setattr(requests, "post", raiser)
    valid, msg, warn = validate_gemini_key("AI" + "za" + "Whatever")
    assert valid is True
    assert warn is True
    assert "timed out" in msg


def test_validate_connection_error(monkeypatch):
    def raiser(*args, **kwargs):
        raise requests.exceptions.ConnectionError()
    monkeypatch.setattr(requests, "post", raiser)
    valid, msg, warn = validate_gemini_key("AI" + "za" + "Whatever")
    assert valid is True
    assert warn is True
    assert "No internet" in msg


# ─────────────────────────────────────────────────────────────────────────────
# Analysis sectioning
# ─────────────────────────────────────────────────────────────────────────────
def test_split_sections_separates_paragraphs_and_bullets():
    text = (
        "Preamble that is dropped\n"
        "### Executive Summary\n"
        "Overall risk is moderate.\n"
        "\n"
        "### Key Risks\n"
        "- Skills gap among Boomers\n"
        "* Finance concentration\n"
        "Shock exposure is limited.\n"
    )
    sections = split_analysis_sections(text)
    assert sections == [
        {"title": "Executive Summary", "paragraphs": ["Overall risk is moderate."], "items": []},
        {
            "title": "Key Risks",
            "paragraphs": ["Shock exposure is limited."],
            "items": ["Skills gap among Boomers", "Finance concentration"],
        },
    ]


def test_split_sections_empty_text():
    assert split_analysis_sections("") == []
    assert split_analysis_sections("No headings at all") == []


# ─────────────────────────────────────────────────────────────────────────────
# Series frame
# ─────────────────────────────────────────────────────────────────────────────
def test_series_frame_is_wide_by_year():
    frame = series_frame({
        "A": [(2020, 0.1), (2021, 0.2)],
        "B": [(2020, 0.3), (2021, 0.4)],
    })
    assert list(frame.columns) == ["A", "B"]
    assert list(frame.index) == [2020, 2021]
    assert frame.index.name == "year"
    assert frame.loc[2021, "B"] == 0.4
