"""
Favorite Movies & TV Shows front end.

This package contains the entry API client, configuration bootstrap,
logging setup and the Streamlit page shell.
"""

__version__ = "1.0.0"
