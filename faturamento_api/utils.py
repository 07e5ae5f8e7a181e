from bson import ObjectId
from bson.decimal128 import Decimal128


def serializar_documento(valor):
    """
    Prepara um documento do MongoDB para resposta JSON

    Converte ObjectId em string e Decimal128 em float, inclusive dentro de
    listas e subdocumentos.
    """
    if isinstance(valor, ObjectId):
        return str(valor)
    if isinstance(valor, Decimal128):
        return float(valor.to_decimal())
    if isinstance(valor, dict):
        return {chave: serializar_documento(v) for chave, v in valor.items()}
    if isinstance(valor, list):
        return [serializar_documento(v) for v in valor]
    return valor
