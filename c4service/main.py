import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from c4service.api import router as api_router
from c4service.config import Settings
from c4service.service import build_service

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Connect Four Service")
app.state.game_service = build_service(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
