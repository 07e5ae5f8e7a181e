from fastapi import APIRouter
from .processos import router as processos_router
from .dashboard import router as dashboard_router
from .admin import router as admin_router

router = APIRouter()

router.include_router(processos_router, prefix="/processos", tags=["Processos"])
router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
