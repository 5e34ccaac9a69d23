"""Configuration for the fixture and prediction core."""

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional, Dict, List
import json
import os

from predicta.constants import DEFAULT_COMPETITIONS, FOOTBALL_DATA_BASE_URL, competition_code
from predicta.exceptions import ConfigurationError


# Request pacing (football-data.org free tier allows 10 requests/minute)
_DEFAULT_REQUEST_DELAY = 6.5
_DEFAULT_MAX_ATTEMPTS = 5
_DEFAULT_BACKOFF_BASE = 1.5
_DEFAULT_MAX_BACKOFF = 60.0
_DEFAULT_MAX_JITTER = 1.0
_DEFAULT_REQUEST_TIMEOUT = 15.0

# Cache TTLs (seconds)
_DEFAULT_FIXTURE_CACHE_TTL = 1800
_DEFAULT_STANDINGS_CACHE_TTL = 3600

_DEFAULT_DAYS_AHEAD = 7
_DEFAULT_CACHE_DIR = ".cache"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _coerce_list(value: Optional[str], default: List[str]) -> List[str]:
    if value is None or value == "":
        return list(default)
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(default)


def _coerce_competitions(value: Optional[str], default: List[str]) -> List[str]:
    codes: List[str] = []
    for item in _coerce_list(value, default):
        code = competition_code(item)
        if code and code not in codes:
            codes.append(code)
    return codes or list(default)


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise ConfigurationError(str(path), "config file not found")
    if path.suffix.lower() == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        return {
            str(k): ",".join(str(item) for item in v) if isinstance(v, list) else str(v)
            for k, v in payload.items()
        }
    return _parse_env_file(path)


@dataclass
class Config:
    # Provider
    api_key: str = ""
    base_url: str = FOOTBALL_DATA_BASE_URL
    competitions: List[str] = field(default_factory=lambda: list(DEFAULT_COMPETITIONS))
    days_ahead: int = _DEFAULT_DAYS_AHEAD

    # Request queue
    request_delay: float = _DEFAULT_REQUEST_DELAY
    max_attempts: int = _DEFAULT_MAX_ATTEMPTS
    backoff_base: float = _DEFAULT_BACKOFF_BASE
    max_backoff: float = _DEFAULT_MAX_BACKOFF
    max_jitter: float = _DEFAULT_MAX_JITTER
    request_timeout: float = _DEFAULT_REQUEST_TIMEOUT

    # Caches
    fixture_cache_ttl: int = _DEFAULT_FIXTURE_CACHE_TTL
    standings_cache_ttl: int = _DEFAULT_STANDINGS_CACHE_TTL
    cache_dir: str = _DEFAULT_CACHE_DIR
    cache_persist: bool = True

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        return cls._from_mapping(os.environ, cls())

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        env_config = cls.from_env()
        if not config_path:
            return env_config
        file_data = _load_config_data(Path(config_path))
        return cls._from_mapping(file_data, env_config)

    @classmethod
    def _from_mapping(cls, data, base: "Config") -> "Config":
        return cls(
            api_key=data.get("FOOTBALL_DATA_API_KEY", base.api_key),
            base_url=data.get("FOOTBALL_DATA_BASE_URL") or base.base_url,
            competitions=_coerce_competitions(data.get("PREDICTA_COMPETITIONS"), base.competitions),
            days_ahead=max(1, _coerce_int(data.get("PREDICTA_DAYS_AHEAD"), base.days_ahead)),
            request_delay=_coerce_float(data.get("PREDICTA_REQUEST_DELAY"), base.request_delay),
            max_attempts=_coerce_int(data.get("PREDICTA_MAX_ATTEMPTS"), base.max_attempts),
            backoff_base=_coerce_float(data.get("PREDICTA_BACKOFF_BASE"), base.backoff_base),
            max_backoff=_coerce_float(data.get("PREDICTA_MAX_BACKOFF"), base.max_backoff),
            max_jitter=_coerce_float(data.get("PREDICTA_MAX_JITTER"), base.max_jitter),
            request_timeout=_coerce_float(data.get("PREDICTA_REQUEST_TIMEOUT"), base.request_timeout),
            fixture_cache_ttl=_coerce_int(data.get("PREDICTA_FIXTURE_CACHE_TTL"), base.fixture_cache_ttl),
            standings_cache_ttl=_coerce_int(
                data.get("PREDICTA_STANDINGS_CACHE_TTL"),
                base.standings_cache_ttl,
            ),
            cache_dir=data.get("PREDICTA_CACHE_DIR") or base.cache_dir,
            cache_persist=_coerce_bool(data.get("PREDICTA_CACHE_PERSIST"), base.cache_persist),
            log_level=(data.get("PREDICTA_LOG_LEVEL") or base.log_level).upper(),
        )

    def to_dict(self) -> Dict[str, str]:
        payload = {k: str(v) for k, v in asdict(self).items()}
        if self.api_key:
            payload["api_key"] = "***"
        return payload

    def cache_path(self, name: str) -> Optional[Path]:
        if not self.cache_persist:
            return None
        return Path(self.cache_dir) / f"{name}.json"
