"""
Main application entry point.
"""

from booking_service.api.app import create_app
from booking_service.config.settings import settings

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "booking_service.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
