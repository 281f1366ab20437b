"""
ASGI entry point.

Builds the application from environment settings for ASGI servers:

    uvicorn errorpage.asgi:app
"""

from errorpage.main import create_app

app = create_app()
