"""API router aggregation."""

from fastapi import APIRouter

from taskboard.api.tasks import router as tasks_router
from taskboard.api.attachments import router as attachments_router

router = APIRouter(prefix="/api")

router.include_router(tasks_router)
router.include_router(attachments_router)
