"""Runtime settings, read from the environment."""
import os

APP_NAME = os.getenv("APP_NAME", "Coaching Lifecycle API")
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
