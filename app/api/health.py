from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/liveness")
async def liveness():
    # 进程活着就算 OK（给 k8s/ALB 用）
    return {"status": "ok"}
