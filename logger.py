import logging
import sys

from config import LOG_FILE, LOG_LEVEL

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(LOG_FILE, encoding='utf-8')
    ]
)

# Create logger
logger = logging.getLogger('schedule_analytics')

# Set logging level for sqlalchemy
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
