from datetime import time

from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "punchclock"
    APP_VERSION: str = "1.0.0"
    ATLAS_APP_CODE: str = "PUNCHCLOCK"

    # Every duration is computed in this zone, never by the database
    TIMEZONE: str = "Europe/Berlin"

    # Auto-checkout settings
    AUTO_CHECKOUT_ACTIVITY: str = "Break"
    AUTO_CHECKOUT_COMMENT: str = "auto checkout at midnight"
    AUTO_CHECKOUT_BOUNDARY: time = time(23, 59, 59)

    # Reporting
    HOURS_PRECISION: int = 2
    TREND_MAX_DAYS: int = 366

    # Badge codes handed out to new users (12 digits)
    STAMP_KEY_MIN: int = 100000000000
    STAMP_KEY_MAX: int = 999999999999

    # Create missing tables on start-up
    AUTO_CREATE_TABLES: bool = True


settings = Settings()
