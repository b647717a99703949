#!/usr/bin/env python3
"""
FastAPI server runner for the Tripcraft itinerary backend
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "tripcraft.api:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload for development
        log_level="info"
    )
