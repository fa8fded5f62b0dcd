from fastapi import APIRouter

from contactscout.api.endpoints import history, scrape

# Routes served at the root, e.g. /scrape-domain
root_router = APIRouter()
root_router.include_router(scrape.router, tags=["Scrape"])

# Routes served under settings.API_PREFIX
api_router = APIRouter()
api_router.include_router(scrape.api_router, tags=["Scrape"])
api_router.include_router(history.router, prefix="/history", tags=["History"])
