#!/usr/bin/env python3
"""
Invalidate the dashboard summary cache (dashboard:* keys).

Usage:
    python invalidate_cache.py            # remove every cached summary
    python invalidate_cache.py --list     # only list the cached keys

Environment variables (optional):
    REDIS_HOST     (default: redis)
    REDIS_PORT     (default: 6379)
    REDIS_DB       (default: 0)
    REDIS_USERNAME (default: default)
    REDIS_PASSWORD (default: "")
"""

import asyncio
import sys

import redis.asyncio as aioredis

from faturamento_api.cache import PADRAO_DASHBOARD
from faturamento_api.config import settings


async def main():
    apenas_listar = "--list" in sys.argv[1:]

    client = aioredis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)

    try:
        await client.ping()
        print(f"Conectado ao Redis em {settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}")
    except Exception as e:
        print(f"Erro ao conectar ao Redis: {e}")
        sys.exit(1)

    deleted = 0
    async for key in client.scan_iter(match=PADRAO_DASHBOARD, count=100):
        if apenas_listar:
            print(f"  {key}")
            continue
        if await client.delete(key):
            print(f"  Deletado: {key}")
            deleted += 1

    if not apenas_listar:
        print(f"\nDashboard: {deleted} chave(s) invalidada(s).")
    await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
