"""passforge -- Streamlit web interface."""

import streamlit as st

from passforge import (
    GenerationOptions,
    PassforgeConfig,
    ValidationError,
    Vault,
    analyze,
    check_compromised,
    generate,
    get_strength_color,
)
from passforge.log import setup_logging

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_LOCK = _LUCIDE.format(s=32, paths=(
    '<rect width="18" height="11" x="3" y="11" rx="2" ry="2"/>'
    '<path d="M7 11V7a5 5 0 0 1 10 0v4"/>'
))

ICON_GAUGE = _LUCIDE.format(s=20, paths=(
    '<path d="m12 14 4-4"/><path d="M3.34 19a10 10 0 1 1 17.32 0"/>'
))

ICON_LIST = _LUCIDE.format(s=20, paths=(
    '<path d="M3 6h.01"/><path d="M3 12h.01"/><path d="M3 18h.01"/>'
    '<path d="M8 6h13"/><path d="M8 12h13"/><path d="M8 18h13"/>'
))

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="passforge",
    page_icon="\U0001f510",
    layout="centered",
)

config = PassforgeConfig.load()
setup_logging(config.log_level)
vault = Vault(config.vault, config.generation)


def _heading(icon: str, text: str) -> None:
    st.markdown(
        f'<p style="display:flex;align-items:center;gap:6px">'
        f"{icon} <strong>{text}</strong></p>",
        unsafe_allow_html=True,
    )


def _show_strength(password: str) -> None:
    report = analyze(password, config.analysis)
    color = get_strength_color(report.score, config.analysis)
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{report.tier.label}</span>"
        f" &nbsp;·&nbsp; {report.score}/100"
        f" &nbsp;·&nbsp; {report.entropy_bits} bits"
        f" &nbsp;·&nbsp; cracked in {report.crack_time}",
        unsafe_allow_html=True,
    )
    st.progress(report.score / 100)
    for rec in report.recommendations:
        st.warning(rec, icon="⚠️")


# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f"{ICON_LOCK} passforge</h1>",
    unsafe_allow_html=True,
)
st.caption(
    "Generate strong passwords and check how strong yours are.  \n"
    "Everything runs locally; nothing is sent over the network."
)

tab_generate, tab_check, tab_saved = st.tabs(["Generate", "Check", "Saved"])

# ── Generate tab ───────────────────────────────────────────────────────────

with tab_generate:
    _heading(ICON_LOCK, "Generate a password")
    gen = config.generation
    col1, col2 = st.columns(2)
    with col1:
        length = st.slider("Length", gen.min_length, gen.max_length, gen.default_length)
    with col2:
        use_upper = st.checkbox("Uppercase", value=True)
        use_lower = st.checkbox("Lowercase", value=True)
        use_numbers = st.checkbox("Numbers", value=True)
        use_symbols = st.checkbox("Symbols", value=True)

    if st.button("Generate password", type="primary"):
        options = GenerationOptions(
            length=length,
            include_uppercase=use_upper,
            include_lowercase=use_lower,
            include_numbers=use_numbers,
            include_symbols=use_symbols,
        )
        try:
            st.session_state["generated"] = generate(options, gen)
        except ValidationError as exc:
            st.error(str(exc))

    generated = st.session_state.get("generated")
    if generated:
        st.code(generated, language=None)
        _show_strength(generated)

        with st.form("save_form", clear_on_submit=True):
            name = st.text_input("Name")
            categories = {c["name"]: c["id"] for c in vault.categories}
            category = st.selectbox("Category", ["(none)", *categories])
            notes = st.text_area("Notes", max_chars=200)
            if st.form_submit_button("Save"):
                try:
                    vault.save_password(
                        name, generated, category=categories.get(category), notes=notes,
                    )
                except ValidationError as exc:
                    st.error(str(exc))
                else:
                    st.success(f"Saved '{name.strip()}'")

# ── Check tab ──────────────────────────────────────────────────────────────

with tab_check:
    _heading(ICON_GAUGE, "Analyse a password")
    password = st.text_input(
        "Password",
        type="default",
        placeholder="Enter a password…",
        autocomplete="off",
    )
    if password:
        _show_strength(password)
        if check_compromised(password)["compromised"]:
            st.error("**Common password!** Attackers try this one first.")

# ── Saved tab ──────────────────────────────────────────────────────────────

with tab_saved:
    _heading(ICON_LIST, "Saved passwords")
    query = st.text_input("Search", placeholder="Name or notes…")
    entries = vault.list_passwords(query=query)
    if not entries:
        st.info("No saved passwords yet.")
    for entry in entries:
        with st.expander(entry.name):
            st.code(entry.password, language=None)
            if entry.notes:
                st.caption(entry.notes)
            if st.button("Delete", key=f"delete-{entry.id}"):
                vault.delete_password(entry.id)
                st.rerun()
