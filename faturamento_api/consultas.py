"""
Montagem dos filtros MongoDB e paginação da listagem de processos
"""
import math
import re
from typing import Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

STATUS_FINALIZADO = "assinado e tramitado"

PAGINA_PADRAO = 1
LIMITE_PADRAO = 20

_INTEIRO_INICIAL = re.compile(r"^\s*[+-]?\d+")


def _contem(texto: str) -> dict:
    """Busca por substring, sem diferenciar maiúsculas e minúsculas"""
    return {"$regex": re.escape(texto), "$options": "i"}


def montar_filtro_processos(
    search: Optional[str] = None,
    status: Optional[str] = None,
    responsavel: Optional[str] = None,
    tratamento: Optional[str] = None,
) -> dict:
    """
    Monta o filtro da listagem de processos.

    Parâmetros vazios não restringem a busca; os demais são combinados com AND.
    O texto de busca casa com numeroProcesso OU credenciado.
    """
    filtro = {}

    if search:
        filtro["$or"] = [
            {"numeroProcesso": _contem(search)},
            {"credenciado": _contem(search)},
        ]
    if status:
        filtro["status"] = status
    if responsavel:
        filtro["responsavel"] = responsavel
    if tratamento:
        filtro["tratamento"] = _contem(tratamento)

    return filtro


def montar_filtro_dashboard(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    is_finalized: Optional[str] = None,
) -> dict:
    """
    Monta o filtro do resumo do dashboard.

    Considera apenas processos com responsável. O intervalo de dataRegulacao só
    é aplicado com as duas datas informadas e a comparação é entre strings, então
    as datas precisam vir em formato ISO.
    """
    filtro = {"responsavel": {"$exists": True, "$ne": ""}}

    if start_date and end_date:
        filtro["dataRegulacao"] = {"$gte": start_date, "$lte": end_date}

    if is_finalized == "true":
        filtro["status"] = STATUS_FINALIZADO
    elif is_finalized == "false":
        filtro["status"] = {"$ne": STATUS_FINALIZADO}

    return filtro


def ler_inteiro_positivo(valor: Optional[str], padrao: int) -> int:
    """
    Converte um parâmetro de query para inteiro >= 1, com fallback para o padrão

    Vale o número no início do texto ("2abc" -> 2, "1.5" -> 1).
    """
    match = _INTEIRO_INICIAL.match(valor or "")
    if not match:
        return padrao
    numero = int(match.group(0))
    return numero if numero >= 1 else padrao


def paginar_processos(colecao: Collection, filtro: dict, page: int, limit: int) -> dict:
    """Conta o total do filtro e busca uma página ordenada por dataImportacao (mais recentes primeiro)"""
    skip = (page - 1) * limit

    total = colecao.count_documents(filtro)
    processos = list(
        colecao.find(filtro)
        .sort("dataImportacao", DESCENDING)
        .skip(skip)
        .limit(limit)
    )

    return {
        "data": processos,
        "meta": {
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        },
    }
