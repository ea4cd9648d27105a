import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    TIMEOUT_SECONDS: float = float(os.getenv("CHECKCORS_TIMEOUT_SECONDS", "30"))
    MAX_WORKERS: int = int(os.getenv("CHECKCORS_MAX_WORKERS", 0))
    LOG_LEVEL: str = os.getenv("CHECKCORS_LOG_LEVEL", "INFO").upper()


settings = Settings()
