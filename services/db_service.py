# services/db_service.py
from functools import lru_cache

from pymongo import MongoClient
from pymongo.database import Database

from config.settings import settings


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    # MongoClient is thread-safe and connects lazily; one per process.
    return MongoClient(settings.MONGODB_URI)


def get_db() -> Database:
    return get_client()[settings.DB_NAME]
