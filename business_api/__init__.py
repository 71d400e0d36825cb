"""
business_api — FastAPI HTTP 서비스

    from business_api import AppSettings, create_app
    app = create_app(AppSettings(database_url="sqlite+aiosqlite:///./dev.db"))
"""

from .app import create_app
from .errors import ServiceError
from .settings import AppSettings

__all__ = ["AppSettings", "ServiceError", "create_app"]
