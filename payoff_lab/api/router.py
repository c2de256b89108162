from fastapi import APIRouter

from payoff_lab.api.endpoints import meta, payoff, runs

api_router = APIRouter()

api_router.include_router(payoff.router, prefix="/v1/payoff", tags=["payoff"])
api_router.include_router(meta.router, prefix="/v1/meta", tags=["meta"])
api_router.include_router(runs.router, prefix="/v1/runs", tags=["runs"])
