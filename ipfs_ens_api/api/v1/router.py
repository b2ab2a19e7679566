"""Main router for API v1."""

from fastapi import APIRouter

from ipfs_ens_api.api.contracts import API_BASE_PATH, RootResource
from ipfs_ens_api.api.v1 import auth, deployments, health

router = APIRouter(prefix=API_BASE_PATH)

router.include_router(health.router, tags=["health"])
router.include_router(
    deployments.router,
    prefix=f"/{RootResource.DEPLOYMENT.value}",
    tags=["deployments"],
)
router.include_router(
    auth.router,
    prefix=f"/{RootResource.LOGIN.value}",
    tags=["auth"],
)
