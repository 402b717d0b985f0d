import logging
from fastapi import FastAPI
from bookinglanes import config
from bookinglanes.routes import layout

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Booking Lanes API",
    description="Lane packing and bar geometry for week-based reservation calendars",
    version="1.0.0"
)

# Include routers
app.include_router(layout.router, prefix="/layout", tags=["layout"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Booking Lanes API",
        "version": "1.0.0",
        "features": [
            "Month and rolling week grids",
            "Priority-tiered lane packing for bookings and blocks",
            "Bar geometry with check-in/checkout insets",
            "Multi-property timeline and day status"
        ],
        "endpoints": {
            "month": "POST /layout/month - Lay out intervals over a month grid",
            "rolling": "POST /layout/rolling - Lay out intervals over a rolling N-day window",
            "property_month": "POST /layout/property-month - Month view of one property from raw records",
            "timeline": "POST /layout/timeline - One row per property over a window",
            "day_status": "POST /layout/day-status - Occupancy of a property on one day"
        },
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}
