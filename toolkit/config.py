"""Environment-backed settings.

Values come from the process environment, optionally seeded from a `.env`
file. Every upstream base URL has a default; credentials do not.
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from dotenv import load_dotenv

from toolkit.errors import ConfigurationError

DEFAULTS: Dict[str, str] = {
    "PORT": "2022",
    "HTTP_TIMEOUT": "10",
    "WEATHER_API_URL": "https://api.open-meteo.com/v1/forecast",
    "MEALDB_API_URL": "https://www.themealdb.com/api/json/v1/1",
    "PLACES_API_URL": "https://maps.googleapis.com/maps/api/place/textsearch/json",
    "KROGER_API_URL": "https://api.kroger.com/v1",
    "KROGER_TOKEN_URL": "https://api.kroger.com/v1/connect/oauth2/token",
}

KNOWN_KEYS = tuple(DEFAULTS) + (
    "GOOGLE_PLACES_API_KEY",
    "KROGER_CLIENT_ID",
    "KROGER_CLIENT_SECRET",
    "TOOLS_API_KEY",
)


@dataclass(frozen=True)
class Settings:
    values: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True
    ) -> "Settings":
        """Build settings from `environ` (default: os.environ) over the defaults."""
        if dotenv:
            load_dotenv()
        source = os.environ if environ is None else environ
        values = dict(DEFAULTS)
        for key in KNOWN_KEYS:
            value = source.get(key)
            if value:
                values[key] = value
        return cls(values=values)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.values.get(key)
        if value:
            return value
        return DEFAULTS.get(key, default)

    def require(self, key: str) -> str:
        value = self.get(key)
        if not value:
            raise ConfigurationError([key])
        return value

    def check(self, keys: Iterable[str]) -> None:
        """Raise ConfigurationError naming every key in `keys` that is unset."""
        missing = [key for key in keys if not self.get(key)]
        if missing:
            raise ConfigurationError(missing)

    @property
    def port(self) -> int:
        return int(self.get("PORT"))

    @property
    def timeout(self) -> float:
        return float(self.get("HTTP_TIMEOUT"))

    @property
    def api_key(self) -> Optional[str]:
        return self.get("TOOLS_API_KEY")
