from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from thematch.config import config, environment
from thematch.routes import leagues, matches, seasons, series, tournaments
from thematch.utils.logging import logger

routers = {
    "Leagues": leagues.router,
    "Matches": matches.router,
    "Seasons": seasons.router,
    "Series": series.router,
    "Tournaments": tournaments.router,
}


def create_app() -> FastAPI:
    app = FastAPI(title="TheMatch API", docs_url="/docs", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for tag, router in routers.items():
        app.include_router(router, tags=[tag])

    logger.info("Started app in %s environment", environment.value)
    return app


app = create_app()
