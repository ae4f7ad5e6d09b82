# catalogo/database/base_repository.py
# Provides a simplified base class for ORM repositories.

from sqlalchemy.engine import Engine

from catalogo.utils.logger import logger

class BaseRepository:
    """
    Base class for data repositories using SQLAlchemy ORM Sessions.
    Methods receive the Session from the caller (see get_db_session);
    the engine is kept for diagnostics.
    """

    def __init__(self, engine: Engine):
        """
        Initializes the BaseRepository.

        Args:
            engine: The SQLAlchemy Engine instance.
        """
        if not isinstance(engine, Engine):
             raise TypeError("engine must be an instance of sqlalchemy.engine.Engine")
        self.engine = engine
        logger.debug(f"{self.__class__.__name__} initialized with SQLAlchemy engine: {engine.url.database}")
