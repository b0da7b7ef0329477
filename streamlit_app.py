import streamlit as st
import pandas as pd
import altair as alt

from fass_medications import MEDICATIONS, NotFound, build_search_url, resolve
from fass_lookup import format_otc, render_report

# --- CONFIGURATION ---
st.set_page_config(
    page_title="FASS Lookup",
    layout="wide",
    page_icon="💊",
    initial_sidebar_state="expanded"
)

OTC_LABELS = {'otc': 'OTC', 'rx': 'Rx', 'conditional': 'Conditional'}

# --- HELPER FUNCTIONS ---

def medications_frame():
    """One row per quick-lookup medication, for the table and the chart."""
    return pd.DataFrame([
        {
            'Substance': med.key.title(),
            'Brands': ', '.join(med.brands),
            'Use': med.use,
            'Dosage': med.dose,
            'OTC': format_otc(med.otc),
            'OTC Group': OTC_LABELS[med.otc.kind],
            'ATC': med.atc,
            'Warnings': med.warnings,
        }
        for med in MEDICATIONS
    ])

# --- MAIN UI ---

with st.sidebar:
    st.title("Quick-lookup")
    for med in MEDICATIONS:
        st.markdown(f"- **{med.key}** ({', '.join(med.brands)})")
    st.divider()
    st.caption("For medications not listed, a FASS.se search link is provided.")

st.markdown("""
<div style="background-color:white;padding:1.5rem;border-radius:12px;box-shadow:0 4px 6px -1px rgba(0,0,0,0.05);margin-bottom:2rem;display:flex;align-items:center;gap:1rem;">
    <div style="font-size: 2.5rem;">🇸🇪</div>
    <div>
        <h1 style="margin:0; font-size: 1.8rem; color:#1e293b;">Swedish Medications</h1>
        <p style="margin:0; color:#64748b;">Quick reference with FASS.se fallback</p>
    </div>
</div>
""", unsafe_allow_html=True)

tab1, tab2 = st.tabs(["🔎 Lookup", "📋 All Medications"])

with tab1:
    query = st.text_input("Medication name", placeholder="e.g. Alvedon, omeprazol, alvedon 500mg")
    if not query.strip():
        st.info("Enter a substance or brand name.")
    else:
        result = resolve(query)
        if isinstance(result, NotFound):
            st.warning(f'No quick info available for "{query}". Check FASS.se below.')
        st.markdown(render_report(query, result))
        st.link_button("Open on FASS.se", build_search_url(query))

with tab2:
    df = medications_frame()
    c1, c2 = st.columns([3, 1])
    with c1:
        st.dataframe(df.drop(columns=['OTC Group']), use_container_width=True, hide_index=True)
    with c2:
        st.markdown("##### OTC Status")
        otc_c = df['OTC Group'].value_counts().reset_index()
        otc_c.columns = ['OTC Group', 'Count']
        st.altair_chart(
            alt.Chart(otc_c).mark_bar().encode(
                x='OTC Group', y='Count', color='OTC Group'
            ).properties(height=300),
            use_container_width=True
        )
