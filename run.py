# Server launcher
# Equivalent to: uvicorn wecraft.main:app --reload
# Usage: python run.py

import uvicorn

from wecraft.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name}...")
    print("Docs: http://localhost:8000/docs")
    print("Health: http://localhost:8000/health")
    print("-" * 50)

    uvicorn.run(
        "wecraft.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
