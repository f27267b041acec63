# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
import requests

import config
from ui.report import (
    ats_color,
    error_message,
    requirements_coverage,
    score_color,
    skills_distribution,
)

# -------------------- CONFIG --------------------
st.set_page_config(page_title="ATSight AI", page_icon="🧠", layout="wide")
st.title("ATSight AI")
st.markdown(
    "Upload your resume and job description to get detailed analysis and personalized recommendations!"
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = config.API_URL

# Latest successful analysis; only ever replaced by a newer one
if "analysis" not in st.session_state:
    st.session_state.analysis = None


def _chips(items, color):
    if not items:
        st.caption("—")
        return
    st.markdown(" ".join(f":{color}-background[{i}]" for i in items))


def _checklist(items, icon):
    if not items:
        st.caption("—")
    for item in items:
        st.markdown(f"{icon} {item}")


def _metric(col, label, value, color):
    with col:
        with st.container(border=True):
            st.caption(label)
            st.markdown(f"### :{color}[{value}]")


# ==================== INPUT ====================
with st.container(border=True):
    st.subheader("📄 Upload Resume")
    resume_file = st.file_uploader("Upload a file", type=["pdf"])
    st.caption(f"PDF up to {config.MAX_UPLOAD_MB}MB")
    if resume_file:
        st.caption(f"✅ Selected file: {resume_file.name}")

    st.subheader("💼 Job Description")
    job_description = st.text_area("Paste the job description here...", height=200)

    run = st.button(
        "🧠 Analyze Resume",
        disabled=not resume_file or not job_description.strip(),
        use_container_width=True,
    )

if run:
    files = {"resume": (resume_file.name, resume_file.getvalue(), "application/pdf")}
    with st.spinner("Analyzing Resume..."):
        try:
            r = requests.post(
                f"{st.session_state.api_url}/analyze",
                files=files,
                data={"job_description": job_description},
                timeout=config.REQUEST_TIMEOUT + 30,
            )
        except requests.exceptions.RequestException as e:
            st.error(f"❌ Connection error: {e}")
            st.stop()

    if r.status_code == 200:
        st.session_state.analysis = r.json()
        st.toast("Analysis complete!", icon="✅")
    else:
        try:
            body = r.json()
        except ValueError:
            body = None
        st.error(f"❌ {error_message(body)}")

# ==================== REPORT ====================
res = st.session_state.analysis
if res:
    # --- Summary ---
    with st.container(border=True):
        st.header("🏆 Analysis Summary")
        c1, c2, c3, c4 = st.columns(4)
        _metric(c1, "🎯 Resume Score", f"{res['resume_score']:g}%", score_color(res["resume_score"]))
        _metric(c2, "🧠 ATS Compatibility", res["ats_compatibility"], ats_color(res["ats_compatibility"]))
        _metric(c3, "📖 Readability", f"{res['readability_score']:g}%", score_color(res["readability_score"]))
        pct = res["skills_match"]["match_percentage"]
        _metric(c4, "💻 Skills Match", f"{pct:g}%", score_color(pct))

        st.markdown("**⚠️ Missing Skills**")
        _chips(res["skills_match"]["missing"], "red")
        st.info(res["overall_summary"])

    # --- Technical Proficiency ---
    with st.container(border=True):
        st.subheader("💻 Technical Proficiency")
        dist = skills_distribution(res)
        st.bar_chart(dist["Skills"])
        st.table(dist)
        c1, c2, c3 = st.columns(3)
        prof = res["technical_proficiency"]
        with c1:
            st.markdown("**Strong Skills**")
            _checklist(prof["strong"], "✅")
        with c2:
            st.markdown("**Moderate Skills**")
            _checklist(prof["moderate"], "🎯")
        with c3:
            st.markdown("**Areas for Improvement**")
            _checklist(prof["weak_or_missing"], "❗")

    # --- Keywords ---
    with st.container(border=True):
        st.subheader("🔍 Keyword Analysis")
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Present**")
            _chips(res["keywords_analysis"]["present_keywords"], "green")
        with c2:
            st.markdown("**Missing**")
            _chips(res["keywords_analysis"]["missing_keywords"], "red")

    # --- Requirements Coverage ---
    with st.container(border=True):
        st.subheader("🎯 Job Requirements Coverage")
        st.bar_chart(requirements_coverage(res), horizontal=True, color=["#00C49F", "#FF8042"])
        cov = res["job_requirements_coverage"]
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Met Requirements**")
            _checklist(cov["met_requirements"], "✅")
        with c2:
            st.markdown("**Missing Requirements**")
            _checklist(cov["missing_requirements"], "❗")

    # --- Experience ---
    with st.container(border=True):
        st.subheader("🧭 Experience Alignment")
        exp = res["experience_alignment"]
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Aligned Experience**")
            _checklist(exp["aligned_experience"], "✅")
        with c2:
            st.markdown("**Missing Experience Areas**")
            _checklist(exp["missing_experience_areas"], "❗")

    # --- Soft Skills ---
    with st.container(border=True):
        st.subheader("💬 Soft Skills Analysis")
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Present Soft Skills**")
            _chips(res["soft_skills_match"]["matched"], "green")
        with c2:
            st.markdown("**Missing Soft Skills**")
            _chips(res["soft_skills_match"]["missing"], "red")

    # --- Additional Insights ---
    with st.container(border=True):
        st.subheader("💡 Additional Insights")
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Resume Details**")
            st.markdown(f"- **Length:** {res['resume_length']}")
            st.markdown(f"- **Tone:** {res['tone_of_language']}")
        with c2:
            st.markdown("**Formatting & Grammar Issues**")
            _checklist(res["formatting_issues"], "🟡")
            _checklist(res["grammar_issues"], "🔴")

    # --- Recommendations ---
    with st.container(border=True):
        st.subheader("💡 Recommendations")
        for rec in res["recommendations"]:
            st.markdown(f"✅ {rec}")
