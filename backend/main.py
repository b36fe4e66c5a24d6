import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

from config import CORS_ORIGINS, COOKIE_SECURE, LOG_LEVEL, SESSION_SECRET_KEY
from database.database import create_tables
from auth import router as auth_router, social_auth_router
from auth.providers import ProviderNotConfiguredError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="WeChat Social Login",
    description="Log in and register users through WeChat OAuth",
    version="1.0.0"
)

# Add CORS middleware for frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session cookie carries the OAuth state and flash messages
app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET_KEY,
    same_site="lax",
    https_only=COOKIE_SECURE,
)

# Include auth routes
app.include_router(auth_router)

# Include social login routes
app.include_router(social_auth_router)


@app.exception_handler(ProviderNotConfiguredError)
async def provider_not_configured_handler(request: Request, exc: ProviderNotConfiguredError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create database tables on startup"""
    create_tables()
    logger.info("Database initialized")


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
