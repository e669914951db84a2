import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    COSMOS_DB_ENDPOINT: str = ""
    COSMOS_DB_KEY: str = ""
    COSMOS_DB_DATABASE: str = "staff-db"
    COSMOS_DB_EMPLOYEES_CONTAINER: str = "employees"
    COSMOS_DB_TICKETS_CONTAINER: str = "tickets"

    SESSION_SECRET_KEY: str = ""
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_MINUTES: int = 8 * 60

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
