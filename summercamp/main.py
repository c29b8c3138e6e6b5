from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from summercamp.core.config import settings
from summercamp.core.logging import configure_logging
from summercamp.api.api import api_router, root_router

configure_logging()

app = FastAPI(title=settings.APP_NAME)

# CORS: use CORS_ORIGINS from env in production; default to the Vite dev server for local work
_default_origins = [
    "http://127.0.0.1:5173", "http://localhost:5173",
    "http://127.0.0.1:4173", "http://localhost:4173",
]
_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] if settings.CORS_ORIGINS else _default_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(root_router)


@app.get("/health")
def health():
    return {"status": "ok"}
