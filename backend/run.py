#!/usr/bin/env python3
# backend/run.py
"""
Server runner.

Serves app.main:app with uvicorn on PORT (default 3000).
"""
import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment != "production",
        log_level="info",
    )
