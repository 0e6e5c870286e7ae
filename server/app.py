"""FastAPI application for exporting agent configurations."""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.export_routes import router as export_router

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

VERSION = "0.1.0"

app = FastAPI(
    title="Agent Forge API",
    description="API server for exporting agent configurations as runnable projects",
    version=VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# include routes
app.include_router(export_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": VERSION,
        "endpoints": {
            "node": "/api/export/node",
            "pocketflow": "/api/export/pocketflow",
            "preview": "/api/export/{target}/files",
            "team": "/api/export/team",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("AGENTFORGE_HOST", "0.0.0.0"),
        port=int(os.getenv("AGENTFORGE_PORT", "8000")),
    )
