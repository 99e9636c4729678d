from os import environ

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(
    key_func=get_remote_address,
    enabled=environ.get("RATE_LIMIT_ENABLED", "True") == "True",
)
