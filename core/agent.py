# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — AI Narrative Analysis
# © 2026 Aparajita Parihar. All rights reserved.
#
# Turns the current cohort parameters and shock into a risk-analysis prompt
# and sends it to one of two interchangeable backends:
#   • host: delegated to the embedding host shell's request endpoint
#   • direct: Google Gemini generateContent REST call
# The adoption engine never imports this module.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
import os

import requests

import config.constants as constants

logger = logging.getLogger(__name__)

HOST_FAILURE_MSG = "Host failed to generate response. Please check the host application."
DIRECT_FAILURE_MSG = (
    "Failed to get analysis. In standalone mode, please ensure your API key "
    "is configured correctly."
)


# ─────────────────────────────────────────────────────────────────────────────
# PROMPT CONSTRUCTION
# ─────────────────────────────────────────────────────────────────────────────

def _format_year(value) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def _cohort_lines(cohorts: dict) -> str:
    return "\n".join(
        f"- {name}: Midpoint Year (t0)={_format_year(p['t0'])}, "
        f"Steepness (k)={float(p['k']):.2f}, Weight (w)={float(p['w']):.2f}"
        for name, p in cohorts.items()
    )


def build_analysis_prompt(generational: dict, industry: dict, shock: float) -> str:
    source = constants.SHOCK_SOURCE_SECTOR
    return (
        "You are an expert risk analyst specializing in technology adoption. "
        "Based on the following parameters for AI adoption, provide a concise risk analysis.\n\n"
        f"**Generational Cohorts Data:**\n{_cohort_lines(generational)}\n\n"
        f"**Industry Cohorts Data:**\n{_cohort_lines(industry)}\n\n"
        "**Shock Scenario:**\n"
        f"A shock of {shock:.2f} is applied to the {source} sector, impacting other "
        "sectors through a predefined cascade matrix.\n\n"
        "**Analysis Request:**\n"
        "Please provide your analysis in markdown format with the following sections:\n"
        "1.  **### Executive Summary**\n"
        "    A brief overview of the overall risk profile based on the adoption curves "
        "and concentration indices.\n"
        "2.  **### Key Risks**\n"
        "    Identify the top 2-3 risks (e.g., rapid adoption in one demographic creating "
        "a skills gap, high concentration in a specific industry, vulnerability to shocks).\n"
        "3.  **### Strategic Recommendations**\n"
        "    Suggest 1-2 actionable strategies to mitigate these risks."
    )


# ─────────────────────────────────────────────────────────────────────────────
# BACKEND SELECTION
# ─────────────────────────────────────────────────────────────────────────────

def host_url() -> str:
    return os.getenv(constants.HOST_URL_ENV, "").strip()


def detect_backend() -> str:
    """'host' when a host request endpoint is configured, else 'direct'."""
    return "host" if host_url() else "direct"


# ─────────────────────────────────────────────────────────────────────────────
# HOST DELEGATION
# ─────────────────────────────────────────────────────────────────────────────

def _call_host(prompt: str, url: str) -> dict:
    """
    Delegate generation to the host shell. Returns ``{"text": ...}`` or
    ``{"error": ...}``.
    """
    payload = {"action": constants.HOST_ACTION, "payload": {"topic": prompt}}
    try:
        resp = requests.post(url, json=payload, timeout=constants.HOST_TIMEOUT_S)
    except requests.exceptions.Timeout:
        return {"error": f"Host request timed out ({constants.HOST_TIMEOUT_S} s)."}
    except requests.exceptions.RequestException as exc:
        return {"error": f"Host request failed: {exc}"}

    if resp.status_code != 200:
        return {"error": f"Host error {resp.status_code}: {resp.text[:200]}"}
    try:
        text = resp.json().get("text", "")
    except ValueError:
        return {"error": "Host returned a non-JSON response."}
    if not text:
        return {"error": "Host returned an empty response."}
    return {"text": text}


# ─────────────────────────────────────────────────────────────────────────────
# GEMINI API CALL
# ─────────────────────────────────────────────────────────────────────────────

def _call_gemini(api_key: str, prompt: str) -> dict:
    """
    Single Gemini API call. Returns ``{"text": ...}`` or ``{"error": ...}``.
    """
    if not api_key:
        return {"error": "No Gemini API key configured."}

    payload = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "maxOutputTokens": constants.MAX_OUTPUT_TOKENS,
            "temperature": 0.2,
            "topP": 0.8,
        },
    }
    try:
        resp = requests.post(
            constants.GEMINI_URL,
            timeout=constants.GEMINI_TIMEOUT_S,
            headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
            json=payload,
        )
    except requests.exceptions.Timeout:
        return {"error": f"Gemini API request timed out ({constants.GEMINI_TIMEOUT_S} s). Check your connection and retry."}
    except requests.exceptions.ConnectionError:
        return {"error": "Could not connect to Gemini API. Check your internet connection."}
    except requests.exceptions.RequestException as exc:
        return {"error": f"Gemini API request failed: {exc}"}

    if resp.status_code != 200:
        try:
            error_msg = resp.json().get("error", {}).get("message", resp.text[:200])
        except ValueError:
            error_msg = resp.text[:200]

        if resp.status_code == 401 or "unauthorized" in error_msg.lower():
            error_msg = "Invalid API key. Please check and try again."
        elif resp.status_code == 403 or "permission" in error_msg.lower():
            error_msg = "API key doesn't have permission. Check your Google Cloud Console."
        elif resp.status_code == 404:
            error_msg = f"Model {constants.GEMINI_MODEL} not available. Error: {error_msg}"
        return {"error": f"Gemini API error {resp.status_code}: {error_msg}"}

    try:
        data = resp.json()
    except ValueError:
        return {"error": "Gemini API returned a non-JSON response."}
    candidates = data.get("candidates", [])
    if not candidates:
        return {"error": "No candidates in Gemini response."}
    parts = candidates[0].get("content", {}).get("parts", [])
    text = " ".join(p["text"] for p in parts if p.get("text")).strip()
    if not text:
        return {"error": "Gemini response contained no text."}
    return {"text": text}


# ─────────────────────────────────────────────────────────────────────────────
# DISPATCH
# ─────────────────────────────────────────────────────────────────────────────

def request_analysis(prompt: str, *, api_key: str = "", backend: str | None = None) -> dict:
    """
    Send ``prompt`` to the active backend.

    Returns ``{"backend": "host"|"direct", "answer": str|None, "error": str|None,
    "detail": str|None}``. Never raises on network failure: ``error`` carries
    the user-facing message for the failing backend and ``detail`` the
    underlying cause.
    """
    backend = backend or detect_backend()
    if backend not in ("host", "direct"):
        raise ValueError(f"Unknown analysis backend: {backend}")

    if backend == "host":
        logger.info("Requesting analysis from host shell")
        result = _call_host(prompt, host_url())
        failure_msg = HOST_FAILURE_MSG
    else:
        logger.info("Requesting analysis from Gemini (%s)", constants.GEMINI_MODEL)
        result = _call_gemini(api_key, prompt)
        failure_msg = DIRECT_FAILURE_MSG

    if "error" in result:
        logger.error("Analysis request via %s backend failed: %s", backend, result["error"])
        return {"backend": backend, "answer": None, "error": failure_msg, "detail": result["error"]}
    return {"backend": backend, "answer": result["text"], "error": None, "detail": None}


def run_analysis(generational: dict, industry: dict, shock: float, *, api_key: str = "", backend: str | None = None) -> dict:
    """Build the prompt for the current triple and request the analysis."""
    prompt = build_analysis_prompt(generational, industry, shock)
    return request_analysis(prompt, api_key=api_key, backend=backend)
