import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost:5432/threadly")
DB_SCHEMA = os.getenv("DB_SCHEMA", "threadly")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

# Tokens are issued by the external identity provider; `sub` is the user's id there.
AUTH_SECRET_KEY = os.getenv("AUTH_SECRET_KEY")
AUTH_ALGORITHM = os.getenv("AUTH_ALGORITHM", "HS256")

HOME_PAGE_SIZE = int(os.getenv("HOME_PAGE_SIZE", "30"))
USERS_PAGE_SIZE = int(os.getenv("USERS_PAGE_SIZE", "20"))

ONBOARDING_PATH = "/onboarding"
PROFILE_EDIT_PATH = "/profile/edit"

# Optional hook the frontend exposes to drop its cached render of a path.
REVALIDATE_WEBHOOK_URL = os.getenv("REVALIDATE_WEBHOOK_URL")
REVALIDATE_TIMEOUT = float(os.getenv("REVALIDATE_TIMEOUT", "3.0"))

LIKE_RATE = os.getenv("LIKE_RATE", "30/minute;1000/day")
POST_RATE = os.getenv("POST_RATE", "6/minute;40/hour;150/day")

# comma-separated words rejected in thread and reply text on top of the built-in list
PROFANITY_EXTRA_WORDS = os.getenv("PROFANITY_EXTRA_WORDS", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
