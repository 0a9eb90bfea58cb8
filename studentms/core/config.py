from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "PSPSchool Student Management System"
    ENVIRONMENT: str = "development"
    DATABASE_URL: str = "sqlite:///school.db"
    LOG_DIR: str = "logs"
    CONSOLE_LOG_LEVEL: str = "WARNING"
    SEED_ON_EMPTY: bool = True
    PASS_THRESHOLD: float = 50.0

    class Config:
        case_sensitive = True
        env_prefix = "STUDENTMS_"


settings = Settings()
