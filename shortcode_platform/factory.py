"""
Manager factory for shortcode_platform.

`create_manager()` builds a fully wired ShortenerManager from
`shortcode_platform.config.settings`, the same way for scripts, examples and
tests. Any collaborator can be injected to override the configured one.
"""

import logging
from typing import Optional

from shortcode_platform.config import settings
from shortcode_platform.manager.shortener_manager import ShortenerManager
from shortcode_platform.manager.strategies import BaseStrategy, get_strategy_from_config
from shortcode_platform.manager.validator import UrlValidator
from shortcode_platform.storage.base import BaseStorage
from shortcode_platform.storage.storage_factory import get_storage

log = logging.getLogger(__name__)


def create_manager(
    storage: Optional[BaseStorage] = None,
    generator: Optional[BaseStrategy] = None,
    validator: Optional[UrlValidator] = None,
) -> ShortenerManager:
    """
    Factory function to build a ShortenerManager.

    Returns:
        ShortenerManager: wired to the configured storage backend, code
        strategy and validator unless overridden.
    """
    # basic console logging when the host application has not set any up
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if storage is None:
        storage = get_storage(
            settings.STORAGE_BACKEND,
            data_dir=settings.DATA_DIR,
            dsn=settings.DB_DSN,
        )
    if generator is None:
        generator = get_strategy_from_config()
    if validator is None:
        validator = UrlValidator(
            allowed_schemes=settings.ALLOWED_SCHEMES,
            max_length=settings.MAX_URL_LENGTH,
        )

    log.info(
        "Shortener ready: storage=%s generator=%s",
        type(storage).__name__,
        type(generator).__name__,
    )
    return ShortenerManager(storage=storage, generator=generator, validator=validator)
