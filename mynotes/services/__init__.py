from mynotes.services.base import DataService
from mynotes.services.memory import InMemoryDataService
from mynotes.services.sql import SqlDataService

__all__ = [
    "DataService",
    "InMemoryDataService",
    "SqlDataService"
]
