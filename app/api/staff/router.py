from fastapi import APIRouter
from app.api.staff import jemaat, keluarga, sakramen

router = APIRouter()
router.include_router(jemaat.router, prefix="/jemaat", tags=["Jemaat"])
router.include_router(keluarga.router, prefix="/keluarga", tags=["Keluarga"])
router.include_router(sakramen.baptis_router, prefix="/baptis", tags=["Sakramen"])
router.include_router(sakramen.sidi_router, prefix="/sidi", tags=["Sakramen"])
router.include_router(sakramen.pernikahan_router, prefix="/pernikahan", tags=["Sakramen"])
