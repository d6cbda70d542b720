import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/backoffice_db")

# Application Metadata
PROJECT_NAME = "Restaurant Back-Office Data Service"
VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Named counters used to mint numeric primary keys
MENU_ITEM_SEQUENCE = os.getenv("MENU_ITEM_SEQUENCE", "menuItemId")
ADDON_SEQUENCE = os.getenv("ADDON_SEQUENCE", "addonId")
