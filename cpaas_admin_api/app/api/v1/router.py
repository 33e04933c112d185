"""
Top-level router for version 1 of the API.

This router aggregates the resource routers under their path prefixes.
When a new resource is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    admin_logs,
    admin_metrics,
    admin_projects,
    admin_users,
    auth,
    campaigns,
    integrations,
    messaging,
    user_logs,
    webhooks,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
router.include_router(admin_projects.router, prefix="/admin/projects", tags=["admin"])
router.include_router(admin_logs.router, prefix="/admin/logs", tags=["admin"])
router.include_router(admin_metrics.router, prefix="/admin/metrics", tags=["admin"])
router.include_router(user_logs.router, prefix="/users/logs", tags=["logs"])
# The messaging router defines its own "/logs" paths.
router.include_router(messaging.router, prefix="/messaging", tags=["messaging"])
router.include_router(campaigns.router, prefix="/campaigns", tags=["campaigns"])
router.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])
router.include_router(integrations.router, prefix="/integrations", tags=["integrations"])
