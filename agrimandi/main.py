from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrimandi.core.config import settings
from agrimandi.core.errors import register_exception_handlers
from agrimandi.core.logger import logger
from agrimandi.core.request_middleware import RequestLoggingMiddleware
from agrimandi.auth.router import router as auth_router
from agrimandi.auth.security import SESSION_TTL
from agrimandi.auth.sessions import SessionStore
from agrimandi.db.init import init_db, seed_mandi_prices
from agrimandi.db.session import SessionLocal, engine
from agrimandi.api import (
    farmer_listings, buyers, acceptance, posts, mandi, weather, content
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Backend API for the AgriMandi regional marketplace",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

# Session bindings live for the lifetime of the process
app.state.sessions = SessionStore(SESSION_TTL)

# Initialize database
@app.on_event("startup")
def startup_event():
    init_db(engine)
    if settings.SEED_MANDI_PRICES:
        db = SessionLocal()
        try:
            seed_mandi_prices(db)
        finally:
            db.close()
    logger.info("Application started")

prefix = settings.API_PREFIX

# Include routers
app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
app.include_router(farmer_listings.router, prefix=f"{prefix}/farmer-listings", tags=["farmer-listings"])
app.include_router(buyers.router, prefix=f"{prefix}/buyers", tags=["buyers"])
app.include_router(acceptance.router, prefix=f"{prefix}/requests", tags=["buyers"])
app.include_router(posts.router, prefix=prefix, tags=["posts"])
app.include_router(mandi.router, prefix=f"{prefix}/mandi", tags=["mandi"])
app.include_router(weather.router, prefix=f"{prefix}/weather", tags=["weather"])
app.include_router(content.news, prefix=f"{prefix}/news", tags=["content"])
app.include_router(content.schemes, prefix=f"{prefix}/schemes", tags=["content"])
app.include_router(content.advisory, prefix=f"{prefix}/advisory", tags=["content"])

@app.get("/")
def read_root():
    return {"message": "Welcome to AgriMandi API"}
