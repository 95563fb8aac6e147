"""
api/limiter.py -- Shared slowapi rate limiter instance.

Import this in both api/main.py (to mount as middleware) and the route
modules that apply per-route limits with @limiter.limit() (auth login and the
public contact form).

Using a single shared instance ensures all routes share the same in-memory
counter store. If this were instantiated in each module separately, each
module would get its own isolated counter and rate limits would never trigger.

Limit strings come from Settings (LOGIN_RATE_LIMIT, CONTACT_RATE_LIMIT) so
deployments can tune them without a code change.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import get_settings

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")

login_rate_limit = get_settings().login_rate_limit
contact_rate_limit = get_settings().contact_rate_limit
