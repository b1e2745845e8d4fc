from __future__ import annotations

"""Streamlit demo UI for the evidence highlighting FastAPI backend."""

import json
from typing import Any

import httpx
import streamlit as st


DEFAULT_API_URL = "http://localhost:8000"
SAMPLE_CONVERSATION = [
    {"role": "user", "content": "Can you help me plan a trip to Lisbon?"},
    {
        "role": "assistant",
        "content": (
            "I'd be happy to help you with that question!\n\n"
            "Let's **break down the problem** into steps:\n"
            "1. Pick your travel dates\n"
            "2. Book flights and a hotel\n\n"
            "Take your time deciding."
        ),
    },
]
SAMPLE_EVIDENCE = "help you with that question\nbreak down the problem\ntake your time"


def _post_json(api_url: str, path: str, payload: dict[str, Any], timeout: float | None):
    """POST JSON payloads to the API."""
    url = api_url.rstrip("/") + path
    with httpx.Client(timeout=timeout) as client:
        return client.post(url, json=payload)


def _health_check(api_url: str) -> tuple[bool, str]:
    """Return backend health status and a human-readable message."""
    url = api_url.rstrip("/") + "/health"
    try:
        with httpx.Client(timeout=5.0) as client:
            response = client.get(url)
        if response.status_code == 200:
            return True, "API is reachable."
        return False, f"API responded with status {response.status_code}."
    except httpx.HTTPError as exc:
        return False, f"API connection failed: {exc}"


def _render_messages(messages: list[dict[str, Any]]) -> None:
    """Render highlighted messages returned by the API."""
    for message in messages:
        role = message.get("role", "assistant")
        with st.chat_message("user" if role == "user" else "assistant"):
            caption = role if not message.get("name") else f"{role} ({message['name']})"
            st.caption(f"{caption} | {message.get('kind')} | {message.get('highlight_count', 0)} highlights")
            st.markdown(message.get("html", ""), unsafe_allow_html=True)


def _render_response(response: httpx.Response) -> None:
    st.code(f"Status: {response.status_code}")
    try:
        payload = response.json()
    except ValueError:
        st.text(response.text)
        return
    if response.status_code != 200:
        st.json(payload)
        return
    if "messages" in payload and payload["messages"]:
        _render_messages(payload["messages"])
    if payload.get("messages_a") or payload.get("messages_b"):
        col_a, col_b = st.columns(2)
        with col_a:
            st.subheader(payload.get("model_a") or "Model A")
            _render_messages(payload.get("messages_a") or [])
        with col_b:
            st.subheader(payload.get("model_b") or "Model B")
            _render_messages(payload.get("messages_b") or [])
    with st.expander("View Raw Response"):
        st.json(payload)


st.set_page_config(page_title="Evidence Highlighter", layout="wide")
st.title("Evidence Highlighter")
st.caption("Streamlit demo UI for the tracelens FastAPI backend.")

with st.sidebar:
    st.header("Connection")
    api_url = st.text_input("API base URL", value=DEFAULT_API_URL)
    request_timeout = st.number_input(
        "Request timeout (seconds, 0 = no timeout)",
        min_value=0,
        max_value=600,
        value=0,
        step=5,
    )
    pretty_print = st.toggle("Pretty-print dictionaries", value=True)
    if st.button("Health Check"):
        ok, message = _health_check(api_url)
        if ok:
            st.success(message)
        else:
            st.error(message)

timeout = None if request_timeout == 0 else float(request_timeout)
tab_conversation, tab_row = st.tabs(["Conversation", "Dataset Row"])

with tab_conversation:
    st.subheader("Conversation")
    raw_messages = st.text_area(
        "Messages (JSON list of role/content objects)",
        value=json.dumps(SAMPLE_CONVERSATION, indent=2),
        height=260,
    )
    evidence = st.text_area("Evidence (one term per line)", value=SAMPLE_EVIDENCE)
    min_similarity = st.slider("Fuzzy match threshold", min_value=0.0, max_value=1.0, value=0.75, step=0.05)
    if st.button("Render Conversation", type="primary"):
        try:
            messages = json.loads(raw_messages)
        except json.JSONDecodeError as exc:
            st.error(f"Messages are not valid JSON: {exc}")
        else:
            payload = {
                "messages": messages,
                "highlights": [line.strip() for line in evidence.splitlines() if line.strip()],
                "pretty_print": pretty_print,
                "min_similarity": min_similarity,
            }
            try:
                _render_response(_post_json(api_url, "/render", payload, timeout))
            except httpx.HTTPError as exc:
                st.error(f"API connection failed: {exc}")

with tab_row:
    st.subheader("Dataset Row")
    raw_row = st.text_area(
        "Row (JSON object with prompt/model_response or model_a/model_b columns)",
        value=json.dumps(
            {"question_id": "q-1", "prompt": "Plan a trip", "model": "demo", "model_response": "Take your time."},
            indent=2,
        ),
        height=200,
    )
    row_evidence = st.text_input("Evidence", value="take your time")
    target_model = st.text_input("Target model (side-by-side only)", value="")
    if st.button("Render Row"):
        try:
            row = json.loads(raw_row)
        except json.JSONDecodeError as exc:
            st.error(f"Row is not valid JSON: {exc}")
        else:
            payload = {
                "row": row,
                "evidence": row_evidence,
                "target_model": target_model or None,
                "pretty_print": pretty_print,
            }
            try:
                _render_response(_post_json(api_url, "/render/row", payload, timeout))
            except httpx.HTTPError as exc:
                st.error(f"API connection failed: {exc}")

st.divider()
st.caption("Tip: Start the API with `uvicorn tracelens.app.main:app --port 8000`.")
