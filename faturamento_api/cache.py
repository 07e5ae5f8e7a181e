import redis
import orjson
import logging
from typing import Optional, Any
from fastapi import Request
from .config import settings

logger = logging.getLogger(__name__)


class RedisCache:
    """
    Cliente Redis para cache do resumo do dashboard

    Qualquer falha do Redis é registrada e tratada como cache vazio;
    a API continua respondendo direto do MongoDB.
    """
    def __init__(self, redis_client: Optional[redis.Redis] = None, enabled: bool = settings.CACHE_ENABLED):
        self.redis_client = redis_client
        self.enabled = enabled
        self._connected = False

    def connect(self):
        """Conecta ao Redis com tratamento de erros"""
        if self._connected or not self.enabled:
            return

        try:
            if self.redis_client is None:
                self.redis_client = redis.Redis.from_url(
                    settings.REDIS_URL,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    max_connections=20
                )

            # Testa a conexão
            self.redis_client.ping()
            self._connected = True
            logger.info("Conexão com Redis estabelecida com sucesso")
        except redis.RedisError as e:
            logger.warning(f"Não foi possível conectar ao Redis: {str(e)}")
            self._connected = False

    def close(self):
        """Fecha a conexão com o Redis"""
        if self.redis_client is not None:
            self.redis_client.close()
        self._connected = False

    def is_available(self) -> bool:
        """Verifica se o Redis está disponível"""
        if not self.enabled or self.redis_client is None:
            return False
        try:
            self.redis_client.ping()
            return True
        except redis.RedisError:
            return False

    def _pronto(self) -> bool:
        if not self._connected:
            self.connect()
        return self._connected

    def get(self, key: str) -> Optional[Any]:
        """
        Obtém um valor do cache

        Args:
            key: Chave do cache

        Returns:
            Valor do cache ou None se não encontrado ou em caso de erro
        """
        if not self._pronto():
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.debug(f"[CACHE HIT] Chave: {key}")
                return orjson.loads(value)
            logger.debug(f"[CACHE MISS] Chave: {key}")
            return None
        except redis.RedisError as e:
            logger.warning(f"Erro ao obter cache para chave {key}: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: int = settings.DASHBOARD_CACHE_TTL) -> bool:
        """
        Define um valor no cache

        Args:
            key: Chave do cache
            value: Valor a ser armazenado (serializável por orjson)
            ttl: Tempo de expiração em segundos

        Returns:
            True se sucesso, False caso contrário
        """
        if not self._pronto():
            return False

        try:
            serialized_value = orjson.dumps(value).decode('utf-8')
            self.redis_client.setex(key, ttl, serialized_value)
            logger.debug(f"[CACHE SET] Chave: {key}, TTL: {ttl}s")
            return True
        except (redis.RedisError, orjson.JSONEncodeError) as e:
            logger.warning(f"Erro ao definir cache para chave {key}: {str(e)}")
            return False

    def get_int(self, key: str) -> int:
        """Lê um contador do cache (0 se ausente ou em caso de erro)"""
        if not self._pronto():
            return 0

        try:
            return int(self.redis_client.get(key) or 0)
        except (redis.RedisError, ValueError) as e:
            logger.warning(f"Erro ao ler contador {key}: {str(e)}")
            return 0

    def incr(self, key: str) -> int:
        """Incrementa um contador do cache e retorna o novo valor (0 em caso de erro)"""
        if not self._pronto():
            return 0

        try:
            return self.redis_client.incr(key)
        except redis.RedisError as e:
            logger.warning(f"Erro ao incrementar contador {key}: {str(e)}")
            return 0

    def clear_pattern(self, pattern: str) -> int:
        """
        Remove todas as chaves que correspondem ao padrão usando SCAN (não bloqueia)

        Args:
            pattern: Padrão de chave (ex: "dashboard:*")

        Returns:
            Número de chaves removidas
        """
        if not self._pronto():
            return 0

        try:
            deleted = 0
            for key in self.redis_client.scan_iter(match=pattern, count=100):
                deleted += self.redis_client.delete(key)
            logger.debug(f"[CACHE CLEAR] Padrão: {pattern}, Chaves removidas: {deleted}")
            return deleted
        except redis.RedisError as e:
            logger.warning(f"Erro ao limpar cache com padrão {pattern}: {str(e)}")
            return 0

    def get_info(self) -> dict:
        """
        Obtém informações do Redis

        Returns:
            Dicionário com informações do Redis
        """
        if not self._pronto():
            return {}

        try:
            info = self.redis_client.info()
            return {
                "version": info.get("redis_version", "unknown"),
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0),
                "total_keys": self.redis_client.dbsize(),
            }
        except redis.RedisError as e:
            logger.warning(f"Erro ao obter informações do Redis: {str(e)}")
            return {}


def get_cache(request: Request) -> RedisCache:
    """Dependency que retorna o cache criado no startup"""
    return request.app.state.cache


PADRAO_DASHBOARD = "dashboard:*"

# Fora do padrão dashboard:* para sobreviver às invalidações
CHAVE_VERSAO_DASHBOARD = "versao:dashboard"


def versao_dashboard(cache: RedisCache) -> int:
    """Versão atual dos resumos; cada alteração nos processos incrementa"""
    return cache.get_int(CHAVE_VERSAO_DASHBOARD)


def gerar_chave_dashboard(
    versao: int,
    start_date: Optional[str],
    end_date: Optional[str],
    is_finalized: Optional[str],
) -> str:
    """
    Gera chave de cache para o resumo do dashboard

    Args:
        versao: Versão lida antes de consultar o banco
        start_date: Data inicial do filtro (ou None)
        end_date: Data final do filtro (ou None)
        is_finalized: "true", "false" ou None

    Returns:
        Chave formatada para cache
    """
    return f"dashboard:v{versao}:resumo:{start_date or ''}:{end_date or ''}:{is_finalized or ''}"


def invalidar_dashboard(cache: RedisCache) -> int:
    """
    Invalida os resumos em cache depois de uma alteração nos processos

    A versão sobe antes da limpeza: um resumo calculado antes da alteração
    é gravado sob a versão antiga e nunca mais é lido.
    """
    cache.incr(CHAVE_VERSAO_DASHBOARD)
    return cache.clear_pattern(PADRAO_DASHBOARD)
