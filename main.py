"""Streamlit entry point: ``streamlit run main.py``."""
from vision_app.app import main

main()
