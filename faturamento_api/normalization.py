"""
Funções de normalização para valores monetários dos processos.

Os valores chegam tanto como número quanto como texto no formato brasileiro
(1.500,00: ponto separa milhar, vírgula separa decimal).
"""
import re

from bson.decimal128 import Decimal128

_NUMERO_INICIAL = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def converter_valor_monetario(valor) -> float:
    """
    Converte um valor monetário armazenado para número.

    Números são usados como estão. Textos perdem os pontos de milhar e têm a
    primeira vírgula trocada por ponto; em seguida vale o maior número no
    início do texto ("12,5 reais" -> 12.5). Ausente, vazio ou ilegível -> 0.
    """
    if not valor or isinstance(valor, bool):
        return 0
    if isinstance(valor, (int, float)):
        return valor
    if isinstance(valor, Decimal128):
        return float(valor.to_decimal())

    limpo = str(valor).replace('.', '').replace(',', '.', 1)
    match = _NUMERO_INICIAL.match(limpo)
    if not match:
        return 0
    return float(match.group(0))


def valor_monetario_valido(valor) -> bool:
    """Indica se um texto contém um valor monetário legível"""
    limpo = str(valor).replace('.', '').replace(',', '.', 1)
    return _NUMERO_INICIAL.match(limpo) is not None
