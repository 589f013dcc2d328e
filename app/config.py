import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./schedule.db")

# Firebase Configuration (ID tokens are verified against this project)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Frontend base URL, also the default CORS origin
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:3000").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Schedule block list configuration
# Content type alias of the element type every schedule item is stored as
SCHEDULE_ITEM_ELEMENT_ALIAS = os.getenv("SCHEDULE_ITEM_ELEMENT_ALIAS", "scheduleItem")
# Title shown for items stored without one
SCHEDULE_DEFAULT_TITLE = os.getenv("SCHEDULE_DEFAULT_TITLE", "Session")
