from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    API_TITLE: str = "API Faturamento"
    API_DESCRIPTION: str = "API para consulta, atualização e resumo dos processos de faturamento"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    PORT: int = 3001

    LOG_LEVEL: str = "INFO"

    # Configurações MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "guias_db"
    MONGODB_COLLECTION: str = "processos"
    MONGODB_TIMEOUT_MS: int = 5000

    # Configurações CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "https://colaboradorfaturamento.vercel.app",
    ]
    CORS_ALLOW_ALL: bool = True

    # Configurações Redis
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_USERNAME: str = "default"
    REDIS_PASSWORD: str = ""

    CACHE_ENABLED: bool = True
    DASHBOARD_CACHE_TTL: int = 15

    @property
    def REDIS_URL(self) -> str:
        """Constrói a URL de conexão do Redis"""
        if self.REDIS_PASSWORD:
            return (
                f"redis://{self.REDIS_USERNAME}:{self.REDIS_PASSWORD}"
                f"@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
            )
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @property
    def cors_origins(self) -> List[str]:
        if self.CORS_ALLOW_ALL:
            return ["*"]
        return self.CORS_ORIGINS


settings = Settings()
