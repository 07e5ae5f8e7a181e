"""
Fixtures compartilhadas: MongoDB em memória (mongomock) e Redis falso (fakeredis).
"""
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import fakeredis
import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure

from faturamento_api.cache import RedisCache
from faturamento_api.database import MongoDatabase, get_colecao
from faturamento_api.main import app


@pytest.fixture
def mongo():
    """Cliente MongoDB em memória, já conectado."""
    db = MongoDatabase(client=mongomock.MongoClient())
    db.conectar()
    return db


@pytest.fixture
def colecao(mongo):
    return mongo.processos


@pytest.fixture
def cache_desligado():
    return RedisCache(enabled=False)


@pytest.fixture
def cache_redis():
    """Cache apoiado em um servidor Redis falso e isolado."""
    servidor = fakeredis.FakeServer()
    return RedisCache(
        redis_client=fakeredis.FakeRedis(server=servidor, decode_responses=True),
        enabled=True,
    )


@pytest.fixture
def client(mongo, cache_desligado):
    """TestClient sem lifespan, com as dependências trocadas pelas fixtures."""
    app.state.mongo = mongo
    app.state.cache = cache_desligado
    return TestClient(app)


@pytest.fixture
def client_com_cache(mongo, cache_redis):
    app.state.mongo = mongo
    app.state.cache = cache_redis
    return TestClient(app)


@pytest.fixture
def processos(colecao):
    """Massa de processos com responsáveis, status e valores variados."""
    base = datetime(2024, 1, 1)
    docs = [
        {
            "nup": "00001",
            "numeroProcesso": "2024.0001",
            "credenciado": "Clinica Sorriso",
            "status": "em analise",
            "responsavel": "Ana",
            "tratamento": "ODONTOLOGIA",
            "valorCapa": "1.000,00",
            "dataRegulacao": "2024-01-10",
            "dataImportacao": base + timedelta(days=1),
        },
        {
            "nup": "00002",
            "numeroProcesso": "2024.0002",
            "credenciado": "Hospital Central",
            "status": "assinado e tramitado",
            "responsavel": "Ana",
            "tratamento": "INTERNACAO",
            "valorCapa": 500,
            "dataRegulacao": "2024-02-15",
            "dataImportacao": base + timedelta(days=2),
        },
        {
            "nup": "00003",
            "numeroProcesso": "2024.0003",
            "credenciado": "Laboratorio Vida",
            "status": "assinado e tramitado",
            "responsavel": "Bruno",
            "tratamento": "EXAMES",
            "valorCapa": "200",
            "dataRegulacao": "2024-03-20",
            "dataImportacao": base + timedelta(days=3),
        },
        {
            "nup": "00004",
            "numeroProcesso": "2024.0004",
            "credenciado": "clinica odonto mais",
            "status": "pendente",
            "responsavel": "",
            "tratamento": "odontologia",
            "valorCapa": "3.000,00",
            "dataRegulacao": "2024-01-12",
            "dataImportacao": base + timedelta(days=4),
        },
        {
            "nup": "00005",
            "numeroProcesso": "2024.0005",
            "credenciado": "Hospital Norte",
            "tratamento": "INTERNACAO",
            "valorCapa": "abc",
            "dataImportacao": base + timedelta(days=5),
        },
    ]
    colecao.insert_many(docs)
    return docs


@pytest.fixture
def client_colecao_com_erro(cache_desligado):
    """TestClient cuja coleção falha em toda operação com erro do pymongo."""
    colecao = MagicMock()
    erro = OperationFailure("falha simulada")
    colecao.count_documents.side_effect = erro
    colecao.find.side_effect = erro
    colecao.update_one.side_effect = erro

    app.state.cache = cache_desligado
    app.dependency_overrides[get_colecao] = lambda: colecao
    yield TestClient(app)
    app.dependency_overrides.pop(get_colecao, None)
