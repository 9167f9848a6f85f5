"""Runtime settings read from the environment and an optional .env file.

Priority: real environment variable > .env entry > built-in default.
Only DIGGER_* keys are taken from .env; malformed lines are skipped.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = 'DIGGER_'
COLOR_KEYS = (
    'DIGGER_PRIMARY',
    'DIGGER_HIGHLIGHT',
    'DIGGER_PENDING',
    'DIGGER_WIP',
    'DIGGER_RESOLVED',
    'DIGGER_CANCELED',
)


def truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def is_hex_color(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def read_dotenv(path: Path) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if not path.is_file():
        return overrides
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"\'')
        if k.startswith(ENV_PREFIX):
            overrides[k] = v
    return overrides


@dataclass(frozen=True)
class Settings:
    alt_screen: bool = True
    log_file: Optional[Path] = None
    log_level: str = 'INFO'
    colors: Mapping[str, str] = field(default_factory=dict)


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  dotenv_path: Optional[Path] = None) -> Settings:
    env = os.environ if environ is None else environ
    dotenv = read_dotenv(dotenv_path if dotenv_path is not None else Path.cwd() / '.env')

    def lookup(key: str) -> Optional[str]:
        return env.get(key) or dotenv.get(key)

    log_file = lookup('DIGGER_LOG_FILE')
    colors = {}
    for key in COLOR_KEYS:
        value = lookup(key)
        if value and is_hex_color(value):
            colors[key] = '#' + value.strip().lstrip('#')
    return Settings(
        alt_screen=truthy_env(lookup('DIGGER_ALT_SCREEN'), True),
        log_file=Path(log_file) if log_file else None,
        log_level=(lookup('DIGGER_LOG_LEVEL') or 'INFO').strip().upper(),
        colors=colors,
    )
