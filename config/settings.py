from dotenv import load_dotenv
from typing import List
from pydantic_settings import BaseSettings

load_dotenv()  # loads .env from current working directory

class Settings(BaseSettings):
    MONGODB_URI: str
    DB_NAME: str
    # No default: the token codec refuses to start without a real secret
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 12
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
