"""Settings read from the environment and an optional project .env file.

Priority: real environment variable > .env entry > default.
Recognised keys: TODO_ALT_SCREEN, TODO_LOG_FILE, TODO_LOG_LEVEL,
TODO_SEED_SAMPLES and NO_COLOR.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_FILE = Path(__file__).resolve().parent.parent / '.env'
KNOWN_KEYS = {'TODO_ALT_SCREEN', 'TODO_LOG_FILE', 'TODO_LOG_LEVEL', 'TODO_SEED_SAMPLES', 'NO_COLOR'}


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def read_env_file(path: Path = ENV_FILE) -> Dict[str, str]:
    """Parse KEY=VALUE lines, keeping only recognised keys."""
    overrides: Dict[str, str] = {}
    if not path.exists():
        return overrides
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k in KNOWN_KEYS:
            overrides[k] = v.strip().strip('"\'')
    return overrides


@dataclass(frozen=True)
class Settings:
    alt_screen: bool = True
    color: bool = True
    log_file: Optional[Path] = None
    log_level: str = 'INFO'
    seed_samples: bool = False

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None,
                 env_file: Path = ENV_FILE) -> "Settings":
        env: Dict[str, str] = read_env_file(env_file)
        env.update(os.environ if environ is None else environ)
        log_file = env.get('TODO_LOG_FILE', '').strip()
        return Settings(
            alt_screen=_truthy_env(env.get('TODO_ALT_SCREEN'), True),
            # NO_COLOR disables colour whenever it is present, whatever its value
            color='NO_COLOR' not in env,
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=(env.get('TODO_LOG_LEVEL') or 'INFO').strip().upper(),
            seed_samples=_truthy_env(env.get('TODO_SEED_SAMPLES'), False),
        )


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
