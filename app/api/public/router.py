from fastapi import APIRouter
from app.api.public import rayon

router = APIRouter()
router.include_router(rayon.router, prefix="/rayon", tags=["PublicRayon"])
