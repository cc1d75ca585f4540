import os

NOMINATIM_USER_AGENT = "floodscene-app/1.0"
NOMINATIM_TIMEOUT = 30

# Comma-separated list; defaults to the Vite dev server
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "FLOODSCENE_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
