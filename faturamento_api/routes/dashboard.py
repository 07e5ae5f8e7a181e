"""
Rotas do dashboard
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..cache import RedisCache, get_cache, gerar_chave_dashboard, versao_dashboard
from ..consultas import montar_filtro_dashboard
from ..dashboard import gerar_resumo
from ..database import get_colecao
from ..models import ErrorType, erro_http
from ..schemas import ResumoResponsavel
from ..utils import serializar_documento

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/resumo",
    response_model=list[ResumoResponsavel],
    summary="Resumo por responsável",
    description="Quantidade e soma do valorCapa dos processos de cada responsável, do maior total para o menor"
)
def resumo(
    startDate: Optional[str] = Query(None, description="Início do intervalo de dataRegulacao (ISO)"),
    endDate: Optional[str] = Query(None, description="Fim do intervalo de dataRegulacao (ISO)"),
    isFinalized: Optional[str] = Query(None, description="'true' só finalizados, 'false' só não finalizados"),
    colecao: Collection = Depends(get_colecao),
    cache: RedisCache = Depends(get_cache),
):
    cache_key = gerar_chave_dashboard(versao_dashboard(cache), startDate, endDate, isFinalized)
    cached_result = cache.get(cache_key)
    if cached_result is not None:
        logger.debug(f"Retornando resumo do cache: {cache_key}")
        return cached_result

    filtro = montar_filtro_dashboard(startDate, endDate, isFinalized)
    try:
        resultado = serializar_documento(gerar_resumo(colecao, filtro))
    except PyMongoError as e:
        logger.error(f"Erro no dashboard: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=erro_http(ErrorType.DATABASE_ERROR, "Erro ao gerar dashboard")
        )

    cache.set(cache_key, resultado)
    return resultado
