from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routes import router
from .models import mensagem_erro
from .config import settings
from .database import MongoDatabase
from .cache import RedisCache

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.mongo = MongoDatabase()
    app.state.mongo.conectar()
    app.state.cache = RedisCache()
    app.state.cache.connect()
    yield
    app.state.cache.close()
    app.state.mongo.fechar()


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health_check(request: Request):
    mongo = getattr(request.app.state, "mongo", None)
    return {
        "status": "online",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "db": "connected" if mongo is not None and mongo.conectado else "disconnected"
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": mensagem_erro(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    erros = exc.errors()
    mensagem = erros[0].get("msg", "Dados inválidos") if erros else "Dados inválidos"
    return JSONResponse(status_code=400, content={"error": mensagem})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Erro não tratado em {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Erro interno do servidor"}
    )

app.include_router(router, prefix="/api")
