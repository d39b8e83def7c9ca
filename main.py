"""
Workout Tracker Recovery & Volume Analytics Service
FastAPI application for per-muscle recovery, weekly volume and balance

Run with: uvicorn main:app --reload --port 8000
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Import routers
from routers import recovery_router, volume_router, balance_router

# Create FastAPI app
app = FastAPI(
    title="Workout Tracker Recovery Analytics",
    description="""
    ## Recovery & Volume Analytics

    Deterministic analytics over your logged workouts and sleep:

    ### Recovery
    - **Muscle Recovery**: Recovery percentage and hours to full recovery per muscle
    - **Sleep Modifier**: Recent sleep quality speeds up or slows down recovery
    - **Training Day Readiness**: How recovered the muscles of a planned day are

    ### Volume
    - **Weekly Volume**: Effective sets per muscle against min/optimal/max landmarks
    - **Trend**: Change against last calendar week

    ### Balance
    - **Balance Score**: How evenly training is spread across 8 body regions

    Every endpoint accepts a snapshot via POST, or reads the tracker database via GET.

    ---

    **Tech Stack**: Python, FastAPI, SQLAlchemy, pandas, numpy
    """,
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc alternative
)

# Configure CORS to allow requests from frontend and Node API
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "workout-tracker-recovery-analytics",
        "version": "1.0.0"
    }


# Include routers
app.include_router(recovery_router)
app.include_router(volume_router)
app.include_router(balance_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Workout Tracker Recovery Analytics",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "recovery": {
                "snapshot": "POST /recovery",
                "current": "GET /recovery"
            },
            "volume": {
                "snapshot": "POST /volume/weekly",
                "current": "GET /volume/weekly"
            },
            "balance": {
                "snapshot": "POST /balance",
                "current": "GET /balance?time_range=week|month|all"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=Config.PORT, reload=True)
