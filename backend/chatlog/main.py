import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from chatlog.core.config import settings
from chatlog.api.deps import ERROR
from chatlog.ledger.db import engine
from chatlog.ledger.models import Base
from chatlog.ingestion.router import router as ingest_router
from chatlog.api.events import router as events_router
from chatlog.api.metrics import router as metrics_router


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
log = logging.getLogger("chatlog.api")

app = FastAPI(title="Chatlog")
# Include routers
app.include_router(ingest_router)
app.include_router(events_router)
app.include_router(metrics_router)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # every failure uses the same envelope, malformed bodies included
    log.info("Rejected request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=422, content=ERROR)


@app.on_event("startup")
def startup():
    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)

@app.get("/health")
def health():
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok"}
