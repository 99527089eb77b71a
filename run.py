#!/usr/bin/env python3
"""Run script for TaskWise."""

import os

import uvicorn
from dotenv import load_dotenv

from taskwise.logging_config import configure_logging

if __name__ == "__main__":
    load_dotenv()
    configure_logging()
    uvicorn.run(
        "taskwise.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "False").lower() == "true",
    )
