import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from labrecord.api import auth, assignments, submissions, execution, records, stats
from labrecord.core.config import settings
from labrecord.core.errors import LabRecordError
from labrecord.db.session import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lab Record API",
    description="Algorithm and code submissions with teacher review and PDF records",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ValidationError, NotFoundError, PersistenceError and TransportError all land here
@app.exception_handler(LabRecordError)
async def lab_record_error_handler(request: Request, exc: LabRecordError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(assignments.router, prefix="/api/assignments", tags=["assignments"])
app.include_router(submissions.router, prefix="/api/submissions", tags=["submissions"])
app.include_router(execution.router, prefix="/api/execution", tags=["execution"])
app.include_router(records.router, prefix="/api/records", tags=["records"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])


@app.on_event("startup")
def startup_event():
    init_db()
    logger.info("✅ Database ready")


@app.get("/health")
def health_check():
    return {"status": "ok"}
