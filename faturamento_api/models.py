from pydantic import BaseModel
from enum import Enum

class ErrorType(str, Enum):
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    PROCESSING_ERROR = "processing_error"
    DATABASE_ERROR = "database_error"

class ErrorDetail(BaseModel):
    type: ErrorType
    message: str
    details: dict | None = None


def erro_http(tipo: ErrorType, mensagem: str, **details) -> dict:
    """Monta o detail de um HTTPException a partir do tipo de erro"""
    return ErrorDetail(type=tipo, message=mensagem, details=details or None).model_dump()


def mensagem_erro(detail) -> str:
    """Extrai a mensagem exibida ao cliente de um detail de HTTPException"""
    if isinstance(detail, dict) and "message" in detail:
        return detail["message"]
    return str(detail)
