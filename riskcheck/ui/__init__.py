"""Streamlit web UI for riskcheck."""
