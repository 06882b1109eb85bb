"""
YouthConnect Insights - recommendations, discovery and analytics service

The read side of the YouthConnect employment and education platform: it ranks
courses, jobs and startups for each user, powers startup discovery, reports
platform analytics and hands out object storage URLs.
"""

__version__ = "0.1.0"
__author__ = "YouthConnect Team"
__email__ = "team@youthconnect.dev"
__description__ = "Recommendations, discovery and analytics for YouthConnect"

# Core imports
from .core.config import YouthConnectConfig
from .core.logging import setup_logging

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "YouthConnectConfig",
    "setup_logging",
]
