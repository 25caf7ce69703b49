import streamlit as st

# === COLOR PALETTE ===
PRIMARY_COLOR    = "#0077ff"
PRIMARY_HOVER    = "#005bb5"
SUCCESS_COLOR    = "#10b981"
DANGER_COLOR     = "#ff4d4f"
TEXT_COLOR       = "#333333"
SUBTLE_TEXT      = "#495057"
GRID_COLOR       = "#e5e7eb"
BACKGROUND_COLOR = "#f5f5f5"
CARD_BG_LIGHT    = "#ffffff"


def apply_css():
    """Shared look for every page: light background, blue buttons, card boxes."""
    st.markdown(f"""
        <style>
        .main {{
            background-color: {BACKGROUND_COLOR};
            color: {TEXT_COLOR};
            font-family: 'Segoe UI','Inter',sans-serif;
        }}
        .psico-card {{
            background: {CARD_BG_LIGHT}; padding: 2rem; border-radius: 8px; margin: .7rem 0;
            box-shadow: 0 4px 8px rgba(0,0,0,0.1);
        }}
        .psico-card h1 {{ font-size: 1.5rem; margin-bottom: 1.5rem; text-align: center; }}
        .stButton button, .stFormSubmitButton button {{
            border-radius: 6px; font-weight: 600; transition: background-color .3s ease;
        }}
        .stButton button[kind="primary"], .stFormSubmitButton button[kind="primary"] {{
            background-color: {PRIMARY_COLOR}; border: none; color: white;
        }}
        .stButton button[kind="primary"]:hover, .stFormSubmitButton button[kind="primary"]:hover {{
            background-color: {PRIMARY_HOVER};
        }}
        .stButton button:disabled {{ background: #cccccc; color: #6c757d; cursor: not-allowed; }}
        h1,h2,h3 {{ color: {TEXT_COLOR}; font-weight: 600; }}
        [data-testid="stSidebar"] {{ background-color: {CARD_BG_LIGHT}; border-right: 1px solid {GRID_COLOR}; }}
        .psico-stat {{ font-size: 1rem; color: {TEXT_COLOR}; margin: .25rem 0; }}
        </style>
    """, unsafe_allow_html=True)


def card_header(title: str, subtitle: str = "") -> str:
    """HTML for a centered card title used by the login and public forms."""
    sub = f"<p style='text-align:center;color:{SUBTLE_TEXT};font-style:italic'>{subtitle}</p>" if subtitle else ""
    return f"<div class='psico-card'><h1>{title}</h1>{sub}</div>"
