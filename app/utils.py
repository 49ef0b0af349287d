"""Utility helpers used across the AdoptionRisk application.

Keeping non-Streamlit logic in a separate module makes it easier to test
without spinning up a full Streamlit runtime.
"""

from __future__ import annotations

import re

import pandas as pd
import requests

from config.constants import GEMINI_URL


# ─────────────────────────────────────────────────────────────────────────────
# API KEY VALIDATION
# ─────────────────────────────────────────────────────────────────────────────

def validate_gemini_key(key: str) -> tuple[bool, str, bool]:
    """Check formatting and optionally call the validation API.

    Returns a tuple ``(is_valid, html_message, warn_flag)`` where:

    * ``is_valid`` indicates whether the key should be considered usable.
    * ``html_message`` is an HTML snippet suitable for display in the UI.
    * ``warn_flag`` is True if the key was accepted but a warning was raised
      (e.g. network failure) so that callers may treat it as "valid for now"
      but not discard the possibility of re-checking later.

    Keys containing line breaks or null bytes are rejected before any
    network call.
    """
    key = key.strip()
    if "\n" in key or "\r" in key:
        return False, "<div class='val-err'>❌ Key contains invalid line-break characters</div>", False
    if "\x00" in key:
        return False, "<div class='val-err'>❌ Key contains invalid null bytes</div>", False

    prefix = "AI" + "za"
    if not key.startswith(prefix):
        return False, "<div class='val-err'>❌ Invalid key format</div>", False

    try:
        payload = {
            "contents": [{"parts": [{"text": "test"}]}],
            "generationConfig": {"maxOutputTokens": 10},
        }
        resp = requests.post(
            GEMINI_URL, headers={"x-goog-api-key": key}, json=payload, timeout=10
        )
        if resp.status_code == 200:
            return True, "<div class='val-ok'>✓ Gemini analysis ready</div>", False
        elif resp.status_code == 401:
            return False, "<div class='val-err'>❌ Invalid API key</div>", False
        elif resp.status_code == 403:
            return False, "<div class='val-err'>❌ API key blocked (check permissions in Google Cloud)</div>", False
        else:
            return True, "<div class='val-ok'>✓ Key format valid (will test on first use)</div>", False
    except requests.exceptions.Timeout:
        return True, "<div class='val-warn'>⚠ Validation timed out — key saved, will test on first use</div>", True
    except requests.exceptions.ConnectionError:
        return True, "<div class='val-warn'>⚠ No internet connection — key saved, will test on first use</div>", True
    except requests.exceptions.RequestException:
        return True, "<div class='val-warn'>⚠ Validation error — key saved, will test on first use</div>", True


# ─────────────────────────────────────────────────────────────────────────────
# ANALYSIS TEXT SECTIONING
# ─────────────────────────────────────────────────────────────────────────────

_SECTION_RE = re.compile(r"### (.*?)\n")


def _is_bullet(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("- ") or stripped.startswith("* ")


def split_analysis_sections(text: str) -> list[dict]:
    """Split markdown-like analysis text on ``### Title`` headings.

    Each section becomes ``{"title", "paragraphs", "items"}``: non-empty
    lines that are not bullets, and bullet lines with their marker removed.
    Text before the first heading is discarded.
    """
    if not text:
        return []
    chunks = _SECTION_RE.split(text)[1:]
    sections = []
    for i in range(0, len(chunks), 2):
        title = chunks[i]
        content = chunks[i + 1] if i + 1 < len(chunks) else ""
        lines = [line for line in content.split("\n") if line.strip()]
        sections.append({
            "title": title,
            "paragraphs": [line for line in lines if not _is_bullet(line)],
            "items": [line.strip()[2:] for line in lines if _is_bullet(line)],
        })
    return sections


# ─────────────────────────────────────────────────────────────────────────────
# SERIES → DATAFRAME
# ─────────────────────────────────────────────────────────────────────────────

def series_frame(series: dict) -> pd.DataFrame:
    """Wide DataFrame indexed by year, one column per cohort.

    ``series`` maps cohort name → ``[(year, value), ...]`` as produced by
    ``core.adoption.generate_series``.
    """
    frame = pd.DataFrame(
        {name: dict(points) for name, points in series.items()}
    )
    frame.index.name = "year"
    return frame.sort_index()
