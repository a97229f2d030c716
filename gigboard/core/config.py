from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "GigBoard")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # MongoDB Settings
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "gigboard_db")

    # JWT Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
    ]

    # Availability calendar
    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")  # "today" is the local calendar date here
    SUMMARY_WINDOW_DAYS: int = int(os.getenv("SUMMARY_WINDOW_DAYS", "30"))
    DISCOVERY_WINDOW_DAYS: int = int(os.getenv("DISCOVERY_WINDOW_DAYS", "7"))

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
