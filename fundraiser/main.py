import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fundraiser import models  # noqa: F401  registers tables on Base.metadata
from fundraiser.config import settings
from fundraiser.database import Base, engine
from fundraiser.routers import (
    auth as auth_router,
    donations as donations_router,
    events as events_router,
    schools as schools_router,
    stats as stats_router,
    students as students_router,
)
from fundraiser.utils.stats import InvalidAmountError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(title="School Fundraiser", lifespan=lifespan)

app.include_router(auth_router.router)
app.include_router(schools_router.router)
app.include_router(students_router.router)
app.include_router(donations_router.router)
app.include_router(events_router.router)
app.include_router(stats_router.router)


@app.exception_handler(InvalidAmountError)
def invalid_amount_handler(request: Request, exc: InvalidAmountError):
    logger.error("Malformed amount while serving %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Failed to compute statistics"})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fundraiser.main:app", host=settings.HOST, port=settings.PORT, reload=True)
