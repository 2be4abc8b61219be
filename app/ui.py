# Run from project root: streamlit run app/ui.py
# UI talks to backend API (POST /query). Conversions come back as a message, computation answers as attachments.

import os

import streamlit as st
import requests

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")

st.title("Ask anything")
st.caption("Convert units (e.g. `5 miles`, `100 f to c`) or ask Wolfram|Alpha (e.g. `integrate x^2`).")

full = st.toggle("Show all result pods", value=False, key="full")

if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New chat", key="new_chat"):
    st.session_state.messages = []
    st.rerun()


def _render(msg: dict) -> None:
    if msg.get("content"):
        st.markdown(msg["content"])
    for att in msg.get("attachments") or []:
        title = att.get("title") or ""
        link = att.get("title_link")
        st.markdown(f"**[{title}]({link})**" if link else f"**{title}**")
        if att.get("image_url"):
            st.image(att["image_url"], caption=att.get("fallback") or None, width=att.get("image_width"))
        elif att.get("fallback"):
            st.text(att["fallback"])


# Show previous messages (local display only)
for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        _render(msg)

# If we just submitted a query, show "Thinking..." while waiting for response
if st.session_state.get("pending_query"):
    prompt = st.session_state.pending_query
    reply: dict = {"role": "assistant", "content": "", "attachments": []}
    with st.chat_message("assistant"):
        thinking_placeholder = st.empty()
        thinking_placeholder.caption("Thinking...")
        try:
            r = requests.post(
                f"{API_BASE}/query",
                json={"text": prompt, "full": full},
                timeout=90,
            )
            thinking_placeholder.empty()
            if not r.ok:
                reply["content"] = f"Error: {r.status_code} — {r.text[:200]}"
                st.error(reply["content"])
            else:
                data = r.json()
                if data.get("error"):
                    reply["content"] = "No answer found."
                else:
                    reply["content"] = data.get("message") or ""
                    reply["attachments"] = data.get("attachments") or []
                _render(reply)
        except requests.RequestException as e:
            thinking_placeholder.empty()
            reply["content"] = f"Connection failed: {e}"
            st.error(reply["content"])
        st.session_state.messages.append(reply)
    del st.session_state["pending_query"]
    st.rerun()

# New message from user: show it immediately, then rerun so "Thinking..." appears
if prompt := st.chat_input("Convert units or ask a question"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_query = prompt
    st.rerun()
