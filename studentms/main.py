import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from studentms.cli.menu import run_menu, show_welcome
from studentms.core.config import settings
from studentms.core.exceptions import SchemaError, StoreOpenError, StudentMSError
from studentms.core.logger import logger
from studentms.services.repository import Repository
from studentms.services.store import Store, close_store


@contextmanager
def lifespan(database_url: Optional[str] = None, seed: Optional[bool] = None) -> Iterator[Repository]:
    """
    Opens the store, prepares the schema and loads the mirror; always closes the store on the way out.

    Raises:
        StoreOpenError: The database could not be opened
        SchemaError: Tables could not be created or seeded
    """
    url = database_url or settings.DATABASE_URL
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} environment")
    logger.debug(f"Database URL: {url}")

    store: Optional[Store] = None
    try:
        store = Store.open(url)
        store.init_schema(seed=settings.SEED_ON_EMPTY if seed is None else seed)
        yield Repository.load(store)
    finally:
        logger.info(f"Shutting down {settings.PROJECT_NAME}")
        close_store(store)


def run() -> int:
    show_welcome()
    try:
        with lifespan() as repo:
            run_menu(repo)
    except StoreOpenError:
        print("Could not open database.")
        return 1
    except SchemaError:
        print("Could not initialize database.")
        return 1
    except StudentMSError as e:
        logger.critical(f"Stopping after internal error: {e}")
        print(f"Internal error: {e}")
        return 2
    except (KeyboardInterrupt, EOFError):
        print()
    return 0


if __name__ == "__main__":
    sys.exit(run())
