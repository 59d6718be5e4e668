"""
Run configuration for the Naukri apply bot.

Values are layered: dataclass defaults, then ``data/bot_config.json`` (if
present), then ``NAUKRI_*`` environment variables, then explicit overrides
(usually CLI flags).
"""

import json
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from naukri_bot.errors import ConfigError
from naukri_bot.models import Credentials
from tools.logger import get_logger

logger = get_logger("Config")

DATA_DIR = "data"
BOT_CONFIG_FILE = os.path.join(DATA_DIR, "bot_config.json")

DISCOVERY_STRATEGIES = ("markers", "selectors", "fallback")

# env var -> (field, parser)
ENV_OVERRIDES = {
    "NAUKRI_JOB_TITLE": ("job_title", str),
    "NAUKRI_APPLICATIONS": ("applications", int),
    "NAUKRI_MAX_RETRIES": ("max_retries", int),
    "NAUKRI_HEADLESS": ("headless", lambda v: v.strip().lower() in ("1", "true", "yes", "on")),
}


@dataclass(frozen=True)
class RunConfig:
    # --- run parameters ---
    job_title: str = "Frontend Developer"
    applications: int = 5
    max_retries: int = 3

    # --- timing (ms) ---
    retry_delay_ms: int = 2000
    settle_timeout_ms: int = 5000
    pacing_min_ms: int = 3000
    pacing_max_ms: int = 5000
    typing_delay_min_ms: int = 50
    typing_delay_max_ms: int = 200

    # --- portal ---
    login_url: str = "https://www.naukri.com/nlogin/login"
    search_url_template: str = "https://www.naukri.com/{slug}-jobs"
    username_selector: str = "#usernameField"
    password_selector: str = "#passwordField"
    submit_selector: str = 'button[type="submit"]'

    # --- discovery heuristics ---
    discovery_strategy: str = "markers"
    listing_class_markers: List[str] = field(default_factory=lambda: ["job", "Job", "listing", "Listing"])
    listing_keywords: List[str] = field(default_factory=lambda: ["Experience", "Salary", "Location"])
    apply_marker: str = "apply"
    excerpt_length: int = 100
    diagnostic_length: int = 1000

    # --- browser ---
    headless: bool = False
    navigation_timeout_ms: int = 60000
    wait_until: str = "networkidle"
    block_trackers: bool = True

    def validate(self) -> "RunConfig":
        if self.applications < 0:
            raise ConfigError(f"applications must be >= 0, got {self.applications}")
        if self.max_retries < 1:
            raise ConfigError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.pacing_min_ms < 0 or self.pacing_max_ms <= self.pacing_min_ms:
            raise ConfigError(
                f"pacing window [{self.pacing_min_ms}, {self.pacing_max_ms}) is empty or negative"
            )
        if self.discovery_strategy not in DISCOVERY_STRATEGIES:
            raise ConfigError(
                f"Unknown discovery strategy: {self.discovery_strategy}. Available: {list(DISCOVERY_STRATEGIES)}"
            )
        if not self.job_title.strip():
            raise ConfigError("job_title must not be empty")
        if "{slug}" not in self.search_url_template:
            raise ConfigError("search_url_template must contain a {slug} placeholder")
        return self


def _known_fields() -> Dict[str, Any]:
    return {f.name: f for f in fields(RunConfig)}


def _check_file_value(key: str, value: Any, expected: Any, path: str) -> Any:
    if expected == List[str]:
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
    elif expected is int:
        # bool is an int subclass
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        type_name = "list of strings" if expected == List[str] else expected.__name__
        raise ConfigError(f"'{key}' in {path} must be a {type_name}, got {value!r}")
    return list(value) if isinstance(value, list) else value


def load_file_config(path: str = BOT_CONFIG_FILE) -> Dict[str, Any]:
    """Reads the optional JSON settings file; unknown keys are ignored with a warning,
    values of the wrong type raise ConfigError."""
    if not path or not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    known = _known_fields()
    values = {}
    for key, value in data.items():
        if key in known:
            values[key] = _check_file_value(key, value, known[key].type, path)
        else:
            logger.warning(f"Ignoring unknown config key '{key}' in {path}")
    return values


def load_env_config(environ=None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    values = {}
    for var, (name, parse) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {var}: {raw!r}") from e
    return values


def load_run_config(path: Optional[str] = BOT_CONFIG_FILE, environ=None, **overrides) -> RunConfig:
    """Builds a validated RunConfig from file, environment and explicit overrides."""
    load_dotenv()
    values = {}
    values.update(load_file_config(path))
    values.update(load_env_config(environ))
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(values) - set(_known_fields())
    if unknown:
        raise ConfigError(f"Unknown config options: {sorted(unknown)}")

    return replace(RunConfig(), **values).validate()


def load_credentials(environ=None) -> Credentials:
    """Reads NAUKRI_USERNAME / NAUKRI_PASSWORD. Missing values are passed through as ''."""
    load_dotenv()
    environ = os.environ if environ is None else environ
    return Credentials(
        username=environ.get("NAUKRI_USERNAME", ""),
        password=environ.get("NAUKRI_PASSWORD", ""),
    )
