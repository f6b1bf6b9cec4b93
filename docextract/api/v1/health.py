from fastapi import APIRouter

from docextract.config import settings
from docextract.services.extraction.worker_pool import get_worker_pool

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "doc-extract", "version": settings.app_version}


@router.get("/health/ready")
async def readiness_check():
    pool = get_worker_pool()
    return {
        "status": "ready",
        "checks": {
            "worker_pool": {
                "workers": pool.max_workers,
                "capacity": pool.capacity,
            },
        },
    }
