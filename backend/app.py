from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import config
from backend.routers import geocode, scene

app = FastAPI(
    title="FloodScene API",
    description="Scene state for the 3D flood depth viewer",
    version="0.1.0",
)

# ---------------------------------------------------------------------------
# CORS -- allow the browser renderer's dev server
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(geocode.router)
app.include_router(scene.router)


@app.get("/")
async def root():
    return {"status": "ok", "service": "FloodScene API"}
