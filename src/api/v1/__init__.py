"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.activity import comments_router, task_activity_router
from api.v1.routes.labels import router as labels_router
from api.v1.routes.labels import task_labels_router
from api.v1.routes.tasks import project_tasks_router
from api.v1.routes.tasks import router as tasks_router

router = APIRouter()
router.include_router(project_tasks_router)
router.include_router(tasks_router)
router.include_router(task_activity_router)
router.include_router(comments_router)
router.include_router(task_labels_router)
router.include_router(labels_router)
