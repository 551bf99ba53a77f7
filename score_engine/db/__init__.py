from .repositories import DBScoreProfileRepository
from .session import create_session, get_engine

__all__ = ["DBScoreProfileRepository", "create_session", "get_engine"]
