import time
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from resume_screener.frontend.api_client import ApiError, PipelineClient

POLL_SECONDS = 2

# Page configuration
st.set_page_config(
    page_title="Smart Resume Screener",
    page_icon="📄",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        color: #1f2937;
        text-align: center;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #6b7280;
        text-align: center;
        margin-bottom: 2rem;
    }
    .score-high { color: #059669; font-weight: 600; }
    .score-medium { color: #d97706; font-weight: 600; }
    .score-low { color: #dc2626; font-weight: 600; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_client() -> PipelineClient:
    return PipelineClient()


def render_sidebar(client: PipelineClient):
    with st.sidebar:
        st.header("System Status")
        if client.is_live():
            st.success("Backend API: Connected")
        else:
            st.error("Backend API: Disconnected")

        st.markdown("---")
        if st.button("Load Demo Data", use_container_width=True):
            try:
                client.load_demo()
            except ApiError as e:
                st.error(str(e))
            st.rerun()

        st.markdown("### Instructions")
        st.markdown("""
        1. Paste the job description
        2. Upload one or more candidate resume PDFs
        3. Click 'Run Analysis'
        4. Open a candidate to see details or chat about them
        """)


def render_stats(client: PipelineClient):
    stats = client.get_stats()
    if not stats or stats["completed_count"] == 0:
        return
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Candidates", stats["candidate_count"])
    c2.metric("Avg. Score", f"{stats['average_score']}%")
    c3.metric("Top Tier", stats["top_tier_count"])
    c4.metric("Top Gap", stats["top_missing_skill"] or "None")


def render_table(entries: List[Dict[str, Any]]):
    rows = []
    for e in entries:
        result = e.get("result") or {}
        rows.append({
            'Candidate': e["label"],
            'Role Match': result.get("role_match", "Pending Analysis"),
            'Score': e["display_score"],
            'Status': e["status"],
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render_chat(client: PipelineClient, entry: Dict[str, Any]):
    for msg in entry["conversation"]:
        with st.chat_message("user" if msg["role"] == "user" else "assistant"):
            st.write(msg["text"])

    with st.form(f"chat_{entry['id']}", clear_on_submit=True):
        text = st.text_input("Ask about this candidate", key=f"chat_input_{entry['id']}")
        sent = st.form_submit_button("Send", disabled=entry["awaiting_reply"])
    if sent and text.strip():
        with st.spinner("Thinking..."):
            try:
                client.send_chat(entry["id"], text)
            except ApiError as e:
                st.error(str(e))
        st.rerun()


def render_candidate(client: PipelineClient, entry: Dict[str, Any]):
    result = entry.get("result")
    title = entry["label"]
    if result:
        title += f" • {result['role_match']} • Score: {entry['display_score']}"
    else:
        title += f" • {entry['status'].title()}"

    with st.expander(title):
        if entry["status"] == "error":
            st.error(entry["error_message"])
        elif entry["status"] == "analyzing":
            st.info("Analyzing...")
        elif entry["status"] == "idle":
            st.caption("Pending Analysis")

        if result:
            css = f"score-{entry['score_tier']}"
            st.markdown(f'<span class="{css}">Match score: {entry["display_score"]}</span>',
                        unsafe_allow_html=True)
            st.markdown(f"**Reasoning:** {result['reasoning']}")
            overview, chat_tab = st.tabs(["Overview", "Chat"])
            with overview:
                st.markdown(f"**Summary:** {result['summary']}")
                contact = {k: v for k, v in result["contact"].items() if v}
                if contact:
                    st.markdown(" · ".join(contact.values()))
                skills = pd.DataFrame(result["skills"])
                if not skills.empty:
                    st.dataframe(skills, use_container_width=True, hide_index=True)
                if result["missing_skills"]:
                    st.markdown(f"**Missing skills:** {', '.join(result['missing_skills'])}")
                for job in result["experience"]:
                    st.markdown(f"**{job['role']}** at {job['company']} ({job['duration']})")
                    for h in job["highlights"]:
                        st.markdown(f"- {h}")
                for edu in result["education"]:
                    st.markdown(f"🎓 {edu['degree']}, {edu['institution']} {edu.get('year') or ''}")
            with chat_tab:
                render_chat(client, entry)

        col1, col2 = st.columns([1, 1])
        if entry["status"] in ("completed", "error") and entry["has_source"]:
            if col1.button("Re-analyze", key=f"rerun_{entry['id']}"):
                try:
                    client.reanalyze(entry["id"])
                except ApiError as e:
                    st.error(str(e))
                st.rerun()
        if col2.button("Remove", key=f"remove_{entry['id']}"):
            client.remove_resume(entry["id"])
            st.rerun()


def main():
    client = get_client()

    st.markdown('<h1 class="main-header">Smart Resume Screener</h1>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">AI-powered resume analysis and candidate pipeline</p>', unsafe_allow_html=True)

    render_sidebar(client)

    try:
        pipeline = client.get_pipeline(ranked=True)
    except ApiError as e:
        st.error(str(e))
        return

    col1, col2 = st.columns([1, 2])

    with col1:
        st.subheader("Job Description")
        jd = st.text_area("Paste the job description", value=pipeline["job_description"], height=300)
        if jd != pipeline["job_description"]:
            client.set_job_description(jd)

    with col2:
        st.subheader("Candidate Pipeline")
        entries = pipeline["entries"]
        st.caption("Upload PDF resumes to begin" if not entries else f"{len(entries)} candidates in pipeline")

        with st.form("upload_form", clear_on_submit=True):
            resume_files = st.file_uploader(
                "Upload one or more Resume PDFs",
                type=['pdf'],
                accept_multiple_files=True,
            )
            uploaded = st.form_submit_button("Add to Pipeline")
        if uploaded and resume_files:
            client.upload_resumes([(f.name, f.getvalue(), f.type) for f in resume_files])
            st.rerun()

        if entries:
            busy = pipeline["is_busy"]
            if st.button("Analyzing..." if busy else "Run Analysis", type="primary",
                         disabled=busy or not jd.strip()):
                try:
                    client.start_analysis()
                except ApiError as e:
                    st.warning(str(e))
                st.rerun()

    if pipeline["entries"]:
        st.markdown("---")
        render_stats(client)
        st.subheader("Analysis Results")
        render_table(pipeline["entries"])
        for entry in pipeline["entries"]:
            render_candidate(client, entry)

    if pipeline["is_busy"]:
        time.sleep(POLL_SECONDS)
        st.rerun()


if __name__ == "__main__":
    main()
