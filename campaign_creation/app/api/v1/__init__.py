from fastapi import APIRouter

from .endpoints import general
from .endpoints.campaigns import routes as campaign_routes

router = APIRouter(prefix='/v1', tags=['V1'])
router.include_router(general.router)
router.include_router(campaign_routes.router, prefix='/campaigns', tags=['Campaigns'])
