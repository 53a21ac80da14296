import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mermaid_app.config import get_settings

# Import routers
from mermaid_app.api import chat, diagram

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

SERVICE_VERSION = "1.0.0"

app = FastAPI(title="Mermaid Generation Service", version=SERVICE_VERSION)

# CORS_ALLOW_ORIGINS is a comma-separated list; "*" when unset
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

app.include_router(chat.router, prefix="/api", tags=["Content Agent"])
app.include_router(diagram.router, prefix="/api", tags=["Diagram Agent"])


@app.get("/health")
async def health_check():
    """Liveness probe with the running configuration mode"""
    return {"status": "healthy", "version": SERVICE_VERSION, "environment": get_settings().app_env}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mermaid_app.main:app", host="0.0.0.0", port=8000)
