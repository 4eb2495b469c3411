"""Environment-backed configuration.

Values are read from the process environment; api/main.py loads a .env file
with python-dotenv before anything here is called.
"""

import os
import re
from dataclasses import dataclass

DEFAULT_ACCESS_TOKEN_EXPIRATION = '15m'
DEFAULT_REFRESH_TOKEN_EXPIRATION = '30d'

_DURATION_UNITS = {'s': 1, 'm': 60, 'h': 3600, 'd': 86400}
_DURATION_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')


def parse_duration(value: str | int) -> int:
    """Convert '900', '15m', '12h' or '30d' to a number of seconds."""
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"Invalid duration: {value!r} (expected e.g. '900', '15m', '30d')")
        amount, unit = match.groups()
        seconds = int(amount) * _DURATION_UNITS[unit or 's']
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return seconds


@dataclass(frozen=True)
class TokenSettings:
    access_token_secret: str
    access_token_expiration: int
    refresh_token_secret: str
    refresh_token_expiration: int

    def __post_init__(self):
        if not self.access_token_secret or not self.refresh_token_secret:
            raise ValueError("Access and refresh token secrets must both be set")
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ")

    @classmethod
    def from_env(cls) -> 'TokenSettings':
        access_secret = os.getenv('ACCESS_TOKEN_SECRET')
        refresh_secret = os.getenv('REFRESH_TOKEN_SECRET')
        missing = [
            name for name, value in (
                ('ACCESS_TOKEN_SECRET', access_secret),
                ('REFRESH_TOKEN_SECRET', refresh_secret),
            ) if not value
        ]
        if missing:
            raise ValueError(
                f"{', '.join(missing)} environment variable(s) required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        return cls(
            access_token_secret=access_secret,
            access_token_expiration=parse_duration(
                os.getenv('ACCESS_TOKEN_EXPIRATION', DEFAULT_ACCESS_TOKEN_EXPIRATION)
            ),
            refresh_token_secret=refresh_secret,
            refresh_token_expiration=parse_duration(
                os.getenv('REFRESH_TOKEN_EXPIRATION', DEFAULT_REFRESH_TOKEN_EXPIRATION)
            ),
        )


def get_user_store_backend() -> str:
    """Which UserRepository implementation to wire: 'mongodb' or 'sql'."""
    backend = os.getenv('USER_STORE', 'mongodb').strip().lower()
    if backend not in ('mongodb', 'sql'):
        raise ValueError(f"USER_STORE must be 'mongodb' or 'sql', got {backend!r}")
    return backend
