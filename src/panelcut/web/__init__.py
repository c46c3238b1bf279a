"""FastAPI REST API for panelcut.

Usage:
    uvicorn panelcut.web:app --reload
"""

from panelcut.web.app import app, create_app

__all__ = ["app", "create_app"]
