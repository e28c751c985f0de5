"""
Core discovery and publishing helpers for go-modules-action.
"""

from .module_locator import DiscoveryError, locate_modules  # noqa: F401
from .result_publisher import PublishError, PublishFailure, publish_modules  # noqa: F401
