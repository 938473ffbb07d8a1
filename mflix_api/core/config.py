from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from fastapi import Request
import os

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Sample Mflix API"
    VERSION: str = "1.0.0"
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB_NAME: str = os.getenv("MONGODB_DB_NAME", "sample_mflix")
    MOVIES_COLLECTION: str = "movies"
    COMMENTS_COLLECTION: str = "comments"
    API_PREFIX: str = ""
    DOC_PATH: str = "/doc"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    class Config:
        case_sensitive = True

settings = Settings()

def get_settings(request: Request) -> Settings:
    """Returns the settings the running application was built with."""
    return request.app.state.settings
