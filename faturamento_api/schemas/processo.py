"""
Schemas Pydantic para listagem e atualização de processos
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Any, Optional, Union

from ..normalization import converter_valor_monetario, valor_monetario_valido

CAMPOS_VALOR = ("valorCapa", "valorGlosa", "valorLiberado")


def _coagir_valor(v):
    if v is None or v == "":
        return None
    if isinstance(v, bool):
        raise ValueError("valor monetário inválido")
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, str) and valor_monetario_valido(v):
        return converter_valor_monetario(v)
    raise ValueError("valor monetário inválido")


class AtualizacaoStatus(BaseModel):
    novoStatus: Optional[str] = Field(None, description="Novo status do processo")
    usuarioEmail: Optional[str] = Field(None, description="E-mail de quem fez a alteração")
    usuarioNome: Optional[str] = Field(None, description="Nome de quem fez a alteração")
    statusAnterior: Optional[str] = Field(None, description="Status antes da alteração")
    valorCapa: Optional[Union[int, float]] = None
    valorGlosa: Optional[Union[int, float]] = None
    valorLiberado: Optional[Union[int, float]] = None

    @field_validator(*CAMPOS_VALOR, mode='before')
    @classmethod
    def coagir_valor_monetario(cls, v: Any):
        return _coagir_valor(v)

    def valores(self) -> dict:
        """Valores monetários enviados na requisição"""
        return {
            campo: getattr(self, campo)
            for campo in CAMPOS_VALOR
            if getattr(self, campo) is not None
        }


class AtribuicaoColaborador(BaseModel):
    novoColaborador: Optional[str] = Field(None, description="Nome do colaborador")
    usuarioEmail: Optional[str] = Field(None, description="E-mail de quem atribuiu")


class HistoricoStatus(BaseModel):
    de: str
    para: str
    usuario: str
    responsavel: Optional[str] = None
    data: datetime


class PaginacaoMeta(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int


class ProcessoListResponse(BaseModel):
    data: list[dict]
    meta: PaginacaoMeta


class RespostaSucesso(BaseModel):
    success: bool = True
    message: str
