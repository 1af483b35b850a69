"""Streamlit topic viewer."""
