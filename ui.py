import os
import time
from typing import Any, Dict, List, Optional, Tuple

import requests
import streamlit as st

st.set_page_config(page_title="User Directory", layout="centered")

st.title("User Directory")
st.caption("Admin console for the in-memory user store")

API_BASE_URL = os.environ.get("USER_DIRECTORY_API_URL", "http://127.0.0.1:8000").rstrip("/")
USERS_URL = f"{API_BASE_URL}/api/users"


def _healthcheck(base_url: str) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
    """Returns (ok, message, json_payload_if_any). Never raises."""
    try:
        resp = requests.get(f"{base_url}/healthz", timeout=2)
        if resp.status_code != 200:
            return False, f"HTTP {resp.status_code}", None
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        return True, "Healthy", payload
    except requests.exceptions.RequestException as e:
        return False, f"Not reachable: {e.__class__.__name__}", None


def _call(method: str, url: str, **kwargs: Any) -> Tuple[Optional[Any], Optional[str]]:
    """Returns (json, error_string). Never raises."""
    try:
        resp = requests.request(method, url, timeout=10, **kwargs)
    except requests.exceptions.RequestException as e:
        return None, f"Request failed: {e!r}"

    if resp.status_code >= 400:
        # Show server-provided error message if available.
        try:
            detail = resp.json().get("detail")
        except ValueError:
            detail = resp.text
        return None, f"HTTP {resp.status_code}: {detail}"

    if resp.status_code == 204 or not resp.content:
        return None, None
    try:
        return resp.json(), None
    except ValueError as e:
        return None, f"Invalid JSON from server: {e}"


def _show_users(users: List[Dict[str, Any]]) -> None:
    if not users:
        st.info("No users.")
        return
    st.dataframe(
        [
            {
                "id": u.get("id"),
                "name": f"{u.get('firstName', '')} {u.get('lastName', '')}".strip(),
                "email": u.get("email"),
                "updated": u.get("updatedAt"),
            }
            for u in users
        ],
        use_container_width=True,
    )


# --- Sidebar: backend status ---
with st.sidebar:
    st.subheader("Backend")
    st.write("API:", API_BASE_URL)

    # Small cache so we don't spam /healthz on every widget interaction.
    now = time.time()
    last_ts = st.session_state.get("health_ts", 0.0)
    if st.button("Refresh status") or (now - last_ts) > 3:
        ok, msg, payload = _healthcheck(API_BASE_URL)
        st.session_state["health_ok"] = ok
        st.session_state["health_msg"] = msg
        st.session_state["health_payload"] = payload
        st.session_state["health_ts"] = now

    ok = st.session_state.get("health_ok", False)
    msg = st.session_state.get("health_msg", "Unknown")
    payload = st.session_state.get("health_payload")

    if ok:
        st.success(f"Status: {msg}")
        if isinstance(payload, dict):
            st.caption(f"Version: {payload.get('version', 'unknown')} | Users: {payload.get('users', '?')}")
    else:
        st.error(f"Status: {msg}")
        st.caption("Start the API with: uvicorn user_directory.main:app --reload")

tab_browse, tab_create, tab_edit = st.tabs(["Browse", "Create", "Edit / Delete"])

with tab_browse:
    term = st.text_input("Search by name", placeholder="e.g. jo")
    if term.strip():
        data, err = _call("GET", f"{USERS_URL}/search", params={"name": term})
    else:
        data, err = _call("GET", USERS_URL)
    if err:
        st.error(err)
    else:
        _show_users(data or [])

with tab_create:
    with st.form("create_user"):
        first = st.text_input("First name")
        last = st.text_input("Last name")
        email = st.text_input("Email")
        submitted = st.form_submit_button("Create")
    if submitted:
        data, err = _call("POST", USERS_URL, json={"firstName": first, "lastName": last, "email": email})
        if err:
            st.error(err)
        else:
            st.success(f"Created {data.get('firstName')} {data.get('lastName')} ({data.get('id')})")

with tab_edit:
    user_id = st.text_input("User id")
    if user_id.strip():
        current, err = _call("GET", f"{USERS_URL}/{user_id.strip()}")
        if err:
            st.error(err)
        else:
            with st.form("edit_user"):
                first = st.text_input("First name", value=current.get("firstName", ""))
                last = st.text_input("Last name", value=current.get("lastName", ""))
                email = st.text_input("Email", value=current.get("email", ""))
                save = st.form_submit_button("Save")
            if save:
                # Only send what changed; the API treats omitted fields as unchanged.
                changes = {
                    k: v
                    for k, v in (("firstName", first), ("lastName", last), ("email", email))
                    if v != current.get(k)
                }
                data, err = _call("PUT", f"{USERS_URL}/{user_id.strip()}", json=changes)
                if err:
                    st.error(err)
                else:
                    st.success("Saved.")
                    st.json(data)

            if st.button("Delete user", type="primary"):
                _, err = _call("DELETE", f"{USERS_URL}/{user_id.strip()}")
                if err:
                    st.error(err)
                else:
                    st.success("Deleted.")
