import uvicorn

from contacts_api.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "contacts_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
