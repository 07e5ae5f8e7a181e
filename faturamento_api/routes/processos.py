"""
Rotas de listagem e atualização de processos
"""
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..cache import RedisCache, get_cache, invalidar_dashboard
from ..consultas import (
    LIMITE_PADRAO,
    PAGINA_PADRAO,
    ler_inteiro_positivo,
    montar_filtro_processos,
    paginar_processos,
)
from ..database import get_colecao
from ..models import ErrorType, erro_http
from ..schemas import (
    AtualizacaoStatus,
    AtribuicaoColaborador,
    HistoricoStatus,
    ProcessoListResponse,
    RespostaSucesso,
)
from ..utils import serializar_documento

router = APIRouter()
logger = logging.getLogger(__name__)

STATUS_SEM_STATUS = "Sem status"


@router.get(
    "",
    response_model=ProcessoListResponse,
    summary="Listar processos",
    description="Busca paginada de processos, dos importados mais recentemente para os mais antigos"
)
def listar_processos(
    page: Optional[str] = Query(None, description="Página (a partir de 1)"),
    limit: Optional[str] = Query(None, description="Registros por página"),
    search: str = Query("", description="Texto em numeroProcesso ou credenciado"),
    status: str = Query("", description="Status exato"),
    responsavel: str = Query("", description="Responsável exato"),
    tratamento: str = Query("", description="Parte do tratamento"),
    colecao: Collection = Depends(get_colecao),
):
    pagina = ler_inteiro_positivo(page, PAGINA_PADRAO)
    limite = ler_inteiro_positivo(limit, LIMITE_PADRAO)
    filtro = montar_filtro_processos(search, status, responsavel, tratamento)

    try:
        resultado = paginar_processos(colecao, filtro, pagina, limite)
    except PyMongoError as e:
        logger.error(f"Erro na busca: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=erro_http(ErrorType.DATABASE_ERROR, "Erro interno ao buscar processos")
        )

    resultado["data"] = [serializar_documento(p) for p in resultado["data"]]
    return resultado


@router.put(
    "/{nup}",
    response_model=RespostaSucesso,
    summary="Atualizar status do processo",
    description="Troca o status, registra a mudança no historicoStatus e atualiza os valores enviados"
)
def atualizar_status(
    nup: str,
    dados: AtualizacaoStatus,
    colecao: Collection = Depends(get_colecao),
    cache: RedisCache = Depends(get_cache),
):
    if not dados.novoStatus or not dados.usuarioEmail:
        raise HTTPException(
            status_code=400,
            detail=erro_http(ErrorType.VALIDATION_ERROR, "Dados incompletos")
        )

    agora = datetime.now(timezone.utc)
    historico = HistoricoStatus(
        de=dados.statusAnterior or STATUS_SEM_STATUS,
        para=dados.novoStatus,
        usuario=dados.usuarioEmail,
        responsavel=dados.usuarioNome,
        data=agora,
    )

    campos = {"status": dados.novoStatus, "ultimaAtualizacao": agora}
    campos.update(dados.valores())

    try:
        resultado = colecao.update_one(
            {"nup": nup},
            {
                "$set": campos,
                "$push": {"historicoStatus": historico.model_dump()},
            }
        )
    except PyMongoError as e:
        logger.error(f"Erro ao atualizar processo {nup}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=erro_http(ErrorType.DATABASE_ERROR, "Erro ao atualizar processo")
        )

    if resultado.matched_count == 0:
        raise HTTPException(
            status_code=404,
            detail=erro_http(ErrorType.NOT_FOUND, "Processo não encontrado", nup=nup)
        )

    invalidar_dashboard(cache)
    logger.info(
        f"Status atualizado: nup={nup}, de={historico.de}, "
        f"para={historico.para}, usuario={historico.usuario}"
    )

    return RespostaSucesso(message="Status atualizado com sucesso!")


@router.put(
    "/{nup}/colaborador",
    response_model=RespostaSucesso,
    summary="Atribuir colaborador ao processo",
)
def atribuir_colaborador(
    nup: str,
    dados: AtribuicaoColaborador,
    colecao: Collection = Depends(get_colecao),
    cache: RedisCache = Depends(get_cache),
):
    if not dados.novoColaborador:
        raise HTTPException(
            status_code=400,
            detail=erro_http(ErrorType.VALIDATION_ERROR, "Nome do colaborador é obrigatório")
        )

    try:
        resultado = colecao.update_one(
            {"nup": nup},
            {
                "$set": {
                    "colaborador": dados.novoColaborador,
                    "dataAtribuicao": datetime.now(timezone.utc),
                    "atribuidoPor": dados.usuarioEmail,
                }
            }
        )
    except PyMongoError as e:
        logger.error(f"Erro ao atualizar colaborador do processo {nup}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=erro_http(ErrorType.DATABASE_ERROR, "Erro ao atualizar colaborador")
        )

    if resultado.matched_count == 0:
        raise HTTPException(
            status_code=404,
            detail=erro_http(ErrorType.NOT_FOUND, "Processo não encontrado", nup=nup)
        )

    invalidar_dashboard(cache)
    logger.info(f"Colaborador atribuído: nup={nup}, colaborador={dados.novoColaborador}")

    return RespostaSucesso(message="Colaborador atualizado com sucesso!")
