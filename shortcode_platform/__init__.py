"""
shortcode_platform package initializer.
"""

import logging

from . import analytics
from . import manager
from . import storage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["analytics", "manager", "storage"]
