import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv


class ConfigError(ValueError):
    """Raised when an environment setting cannot be parsed."""
    pass


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (got {raw!r})")


def _parse_int(name: str, raw: str, minimum: int = 1) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer (got {raw!r})")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum} (got {value})")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from JOBMATCH_* environment variables."""

    db_path: Path = Path("data/jobmatch.db")
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = True
    workers: int = 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        level = env.get("JOBMATCH_LOG_LEVEL", defaults.log_level).strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigError(f"JOBMATCH_LOG_LEVEL is not a log level (got {level!r})")

        log_to_file = defaults.log_to_file
        if "JOBMATCH_LOG_FILE" in env:
            log_to_file = _parse_bool("JOBMATCH_LOG_FILE", env["JOBMATCH_LOG_FILE"])

        workers = defaults.workers
        if "JOBMATCH_WORKERS" in env:
            workers = _parse_int("JOBMATCH_WORKERS", env["JOBMATCH_WORKERS"])

        return cls(
            db_path=Path(env.get("JOBMATCH_DB_PATH", str(defaults.db_path))),
            log_level=level,
            log_dir=Path(env.get("JOBMATCH_LOG_DIR", str(defaults.log_dir))),
            log_to_file=log_to_file,
            workers=workers,
        )
