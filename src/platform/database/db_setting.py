"""
Database configuration

Re-exports the SQLAlchemy engine/session helpers from orm_db_setting.py so
models and repositories depend on one import path.
"""

from src.platform.database.orm_db_setting import (
    AsyncEngineManager,
    Base,
    Database,
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
    get_engine,
    get_session_maker,
)

__all__ = [
    'AsyncEngineManager',
    'Base',
    'Database',
    'create_db_and_tables',
    'dispose_engine',
    'drop_db_and_tables',
    'get_engine',
    'get_session_maker',
]
