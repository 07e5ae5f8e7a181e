"""
Resumo do dashboard: processos agrupados por responsável
"""
from typing import Iterable
import logging

from pymongo.collection import Collection

from .normalization import converter_valor_monetario

logger = logging.getLogger(__name__)

# Campos buscados no banco para montar o resumo
DASHBOARD_PROJECAO = {
    "responsavel": 1,
    "valorCapa": 1,
    "nup": 1,
    "credenciado": 1,
    "dataRecebimento": 1,
    "numeroProcesso": 1,
    "producao": 1,
    "status": 1,
    "tipoProcesso": 1,
    "tratamento": 1,
    "ultimaAtualizacao": 1,
}

# Campos de cada processo listado dentro do grupo
CAMPOS_PROCESSO_RESUMO = (
    "nup",
    "credenciado",
    "dataRecebimento",
    "numeroProcesso",
    "producao",
    "status",
    "tipoProcesso",
    "tratamento",
    "ultimaAtualizacao",
    "valorCapa",
)


def agrupar_por_responsavel(processos: Iterable[dict]) -> list[dict]:
    """
    Agrupa processos por responsável somando quantidade e valorCapa

    Returns:
        Lista de {nome, qtd, total, processos}, do maior total para o menor.
        Totais iguais mantêm a ordem em que o responsável apareceu.
    """
    grupos = {}

    for processo in processos:
        nome = processo.get("responsavel")
        valor = converter_valor_monetario(processo.get("valorCapa"))

        if nome not in grupos:
            grupos[nome] = {"nome": nome, "qtd": 0, "total": 0, "processos": []}

        grupo = grupos[nome]
        grupo["qtd"] += 1
        grupo["total"] += valor
        grupo["processos"].append(
            {campo: processo.get(campo) for campo in CAMPOS_PROCESSO_RESUMO}
        )

    return sorted(grupos.values(), key=lambda g: g["total"], reverse=True)


def gerar_resumo(colecao: Collection, filtro: dict) -> list[dict]:
    """Busca todos os processos do filtro (sem paginação) e agrupa por responsável"""
    processos = list(colecao.find(filtro, DASHBOARD_PROJECAO))
    resumo = agrupar_por_responsavel(processos)
    logger.info(f"Resumo do dashboard: processos={len(processos)}, responsaveis={len(resumo)}")
    return resumo
