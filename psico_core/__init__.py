"""
PSICO dashboard core package.

Session/authentication lifecycle, API client, service layer and the
schema-driven CRUD views used by the Streamlit pages.
"""

__version__ = "1.0.0"
