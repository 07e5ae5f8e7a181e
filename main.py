import uvicorn

from faturamento_api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "faturamento_api.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
