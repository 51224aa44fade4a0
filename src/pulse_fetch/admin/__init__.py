"""Admin API functionality for monitoring.

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: stats and configuration reporting
"""

from pulse_fetch.admin.router import api_config_get, api_stats, health_check
from pulse_fetch.admin.service import get_current_config, get_stats

__all__ = [
    # Router functions
    "api_config_get",
    "api_stats",
    "health_check",
    # Service functions
    "get_current_config",
    "get_stats",
]
