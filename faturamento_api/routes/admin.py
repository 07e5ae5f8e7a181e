from fastapi import APIRouter, Depends, HTTPException
from ..cache import RedisCache, get_cache, invalidar_dashboard
from ..models import ErrorType, erro_http

router = APIRouter()


@router.get("/cache/status")
def cache_status(cache: RedisCache = Depends(get_cache)):
    """
    Verifica o status da conexão com o Redis.

    Returns:
        dict: Status da conexão e informações do Redis
    """
    if not cache.enabled:
        return {
            "status": "disabled",
            "message": "Cache desativado na configuração",
            "connected": False
        }

    cache.connect()
    if not cache.is_available():
        return {
            "status": "unavailable",
            "message": "Redis não está disponível ou não foi possível conectar",
            "connected": False
        }

    return {
        "status": "ok",
        "message": "Redis conectado e funcionando",
        "connected": True,
        "info": cache.get_info()
    }


@router.delete("/cache/dashboard")
def reset_cache_dashboard(cache: RedisCache = Depends(get_cache)):
    """
    Remove todos os resumos do dashboard guardados no cache.

    Returns:
        dict: Resultado da operação
    """
    cache.connect()
    if not cache.is_available():
        raise HTTPException(
            status_code=503,
            detail=erro_http(ErrorType.SERVICE_UNAVAILABLE, "Redis não está disponível")
        )

    deleted = invalidar_dashboard(cache)

    return {
        "status": "ok",
        "message": "Cache do dashboard resetado com sucesso",
        "keys_deleted": deleted
    }
