import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dailytasks.core.config import settings
from dailytasks.core.logging_setup import setup_logging
from dailytasks.routers import auth, live, pages, tasks

logger = logging.getLogger(__name__)

app = FastAPI(title="Daily Tasks API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(pages.router)
app.include_router(live.router)

@app.on_event("startup")
async def startup():
    setup_logging(
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR if settings.LOG_TO_FILE else None,
    )
    logger.info(
        "Daily Tasks API starting backend=%s table=%s ownership=%s",
        settings.SUPABASE_URL,
        settings.TASKS_TABLE,
        settings.OWNERSHIP_ENABLED,
    )

@app.get("/")
async def root():
    return {"message": "Daily Tasks API is running"}

def run():
    import uvicorn

    uvicorn.run("dailytasks.main:app", host="0.0.0.0", port=settings.API_PORT)
