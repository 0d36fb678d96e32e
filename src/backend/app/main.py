from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings

app = FastAPI(
    title="Smart Input API",
    description="Free-text transaction parsing for the finance dashboard",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    max_age=86400,
)

@app.get("/")
async def root():
    return {
        "message": "Smart Input API",
        "version": "0.1.0",
        "status": "running"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

# Import routers
from app.routers import parse, transactions

# Include routers
app.include_router(parse.router)
app.include_router(transactions.router)
