from fastapi import APIRouter

from app.api.routes import analytics, entries, export, health, memories, reflection, search


router = APIRouter()

router.include_router(entries.router)
router.include_router(analytics.router)
router.include_router(memories.router)
router.include_router(search.router)
router.include_router(export.router)
router.include_router(reflection.router)
router.include_router(health.router)
