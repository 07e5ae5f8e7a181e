"""
Schemas Pydantic para validação e serialização
"""
from .processo import (
    AtualizacaoStatus,
    AtribuicaoColaborador,
    HistoricoStatus,
    PaginacaoMeta,
    ProcessoListResponse,
    RespostaSucesso,
)
from .dashboard import ResumoResponsavel

__all__ = [
    "AtualizacaoStatus",
    "AtribuicaoColaborador",
    "HistoricoStatus",
    "PaginacaoMeta",
    "ProcessoListResponse",
    "RespostaSucesso",
    "ResumoResponsavel",
]
