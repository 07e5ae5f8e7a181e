"""
Conexão com o MongoDB
"""
from typing import Optional
import logging

from fastapi import Depends, HTTPException, Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .config import settings
from .models import ErrorType, erro_http

logger = logging.getLogger(__name__)


class MongoDatabase:
    """
    Cliente MongoDB compartilhado pelo processo inteiro

    Criado no startup da aplicação e fechado no shutdown. Os handlers recebem
    a coleção de processos via dependency (get_colecao).
    """
    def __init__(
        self,
        uri: str = settings.MONGODB_URI,
        database: str = settings.MONGODB_DATABASE,
        collection: str = settings.MONGODB_COLLECTION,
        client: Optional[MongoClient] = None,
    ):
        self.uri = uri
        self.database_name = database
        self.collection_name = collection
        self.client = client
        self._connected = False

    def conectar(self) -> bool:
        """Conecta ao MongoDB e testa a conexão com um ping"""
        if self._connected:
            return True

        try:
            if self.client is None:
                self.client = MongoClient(
                    self.uri,
                    serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                )
            self.client.admin.command("ping")
            self._connected = True
            logger.info(f"API conectada ao MongoDB: db={self.database_name}")
        except PyMongoError as e:
            logger.error(f"Falha na conexão com Mongo: {str(e)}")
            self._connected = False
        return self._connected

    def fechar(self):
        """Fecha as conexões com o MongoDB"""
        if self.client is not None:
            self.client.close()
            logger.info("Conexões do MongoDB fechadas")
        self._connected = False

    @property
    def conectado(self) -> bool:
        return self._connected

    @property
    def processos(self) -> Collection:
        return self.client[self.database_name][self.collection_name]


def get_mongo(request: Request) -> MongoDatabase:
    """
    Dependency que retorna o cliente MongoDB criado no startup

    Usage:
        @router.get("/endpoint")
        def endpoint(mongo: MongoDatabase = Depends(get_mongo)):
            ...
    """
    return request.app.state.mongo


def get_colecao(mongo: MongoDatabase = Depends(get_mongo)) -> Collection:
    """Dependency para a coleção de processos; 503 enquanto o banco não estiver conectado"""
    if not mongo.conectado and not mongo.conectar():
        raise HTTPException(
            status_code=503,
            detail=erro_http(ErrorType.SERVICE_UNAVAILABLE, "Banco de dados indisponível"),
        )
    return mongo.processos
