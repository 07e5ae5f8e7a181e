"""
Schemas Pydantic para o resumo do dashboard
"""
from pydantic import BaseModel
from typing import Optional, Union


class ResumoResponsavel(BaseModel):
    nome: Optional[str] = None
    qtd: int
    total: Union[int, float]
    processos: list[dict] = []
