import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from .url_parser import parser

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "PROPERTY MANAGEMENT LEASE And RENT RECONCILIATION"
    BACKEND_API_URL: str = os.getenv("BACKEND_API_URL", "http://localhost:8000/api")
    BACKEND_TIMEOUT: float = 30.0
    BACKEND_AUTH_TOKEN: str | None = os.getenv("BACKEND_AUTH_TOKEN")
    BACKEND_XSRF_TOKEN: str | None = os.getenv("BACKEND_XSRF_TOKEN")
    BACKEND_RETRY_ATTEMPTS: int = 2
    DEFAULT_PER_PAGE: int = 15
    # dashboard snapshots load everything in one page where the backend allows it
    SNAPSHOT_PER_PAGE: int = 1000
    DEFAULT_CONTRACT_MONTHS: int = 6
    ALLOWED_HOSTS_RAW: str = os.getenv("ALLOWED_HOSTS", "http://localhost:5173")

    @property
    def ALLOWED_HOSTS(self) -> List[str]:
        return parser.parse_url_list(self.ALLOWED_HOSTS_RAW, "ALLOWED_HOSTS")

    class Config:
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


settings = Settings()
