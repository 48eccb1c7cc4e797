import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.core.config import settings
from app.db.mongo import close_mongo_connection, connect_to_mongo, get_db
from app.models.user import UserCreate, UserRole
from app.repositories.user_repo import UserRepository
from app.utils.ledger_validation import BookingNotFound, LedgerError, NotFound

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


async def bootstrap_admin():
    """Create the first admin account when the users collection is empty."""
    if not settings.BOOTSTRAP_ADMIN_USERNAME or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return
    user_repo = UserRepository(get_db())
    if await user_repo.count_users() > 0:
        return
    await user_repo.create_user(UserCreate(
        username=settings.BOOTSTRAP_ADMIN_USERNAME,
        full_name="Administrator",
        role=UserRole.ADMIN,
        password=settings.BOOTSTRAP_ADMIN_PASSWORD
    ))
    logger.info("Created bootstrap admin '%s'", settings.BOOTSTRAP_ADMIN_USERNAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    await connect_to_mongo()
    await bootstrap_admin()
    yield
    await close_mongo_connection()
    logger.info("Application shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Fallback for ledger errors an endpoint did not translate itself."""
    if isinstance(exc, (BookingNotFound, NotFound)):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    logger.warning("Unhandled ledger error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


app.include_router(api_router, prefix=settings.API_V1_STR)
