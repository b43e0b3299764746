"""
FastAPI application entry point for the Cinelog API.
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinelog.api.config import get_api_host, get_api_port, get_log_level
from cinelog.api.routers import users, reviews, movies, recommendations, system
from cinelog.utils.logging_config import configure_api_logging

app = FastAPI(
    title="Cinelog API",
    description="REST API for a personal movie journal with genre-weighted recommendations",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(reviews.router)
app.include_router(movies.router)
app.include_router(recommendations.router)
app.include_router(system.router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Cinelog API",
        "docs": "/docs",
        "health": "/api/health",
    }


def run():
    """Serve the API with uvicorn."""
    configure_api_logging(level=get_log_level())
    uvicorn.run(app, host=get_api_host(), port=get_api_port(), log_config=None)


if __name__ == "__main__":
    run()
