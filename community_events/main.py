# community_events/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from community_events.api.v1.api import api_router
from community_events.core.config import settings
from community_events.core.limiter import limiter

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.PROJECT_NAME} starting up (env={settings.ENV})")
    yield
    logger.info(f"{settings.PROJECT_NAME} shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="""
        **Community Events Service**

        Backend for the community website.

        ## Features

        * **Events**: Create, publish, update and delete community events
        * **RSVPs**: Capacity-limited attendance with a first-come waitlist
        * **Profiles**: Member profiles and the events each member is attending
        * **Admin dashboard**: Headline statistics and user management
        * **Newsletter**: Email subscription list

        ## Authentication

        Most endpoints require a JWT issued by the identity provider via the
        `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Community Events Service is running"}
