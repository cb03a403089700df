import os
from dotenv import load_dotenv

# Load environment variables from the .env file
load_dotenv()

# Database settings
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///schedule_analytics.db")

# Assignee overload threshold, in estimated hours
OVERLOAD_THRESHOLD_HOURS = float(os.getenv("OVERLOAD_THRESHOLD_HOURS", "40"))

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "schedule_analytics.log")
