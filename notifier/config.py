"""Environment-driven settings for the notifier process."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .shell import DEFAULT_PRESETS

_TRUE_VALUES = ("1", "true", "on", "yes", "online")
_FALSE_VALUES = ("0", "false", "off", "no", "offline")

DEFAULT_ADMINS = "Hamid:online,Mudassir:offline"


@dataclass(frozen=True)
class NotifierConfig:
    log_level: str = "INFO"
    admins: Tuple[Tuple[str, bool], ...] = (("Hamid", True), ("Mudassir", False))
    presets: Tuple[str, ...] = DEFAULT_PRESETS
    host: str = "0.0.0.0"
    port: int = 5000
    stream_queue_size: int = 100


def _parse_state(value: str) -> bool:
    state = value.strip().lower()
    if state in _TRUE_VALUES:
        return True
    if state in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid admin state '{value}'")


def parse_admins(raw: str) -> Tuple[Tuple[str, bool], ...]:
    """Parse ``name:state`` pairs separated by commas; state defaults to offline."""
    admins = []
    seen = set()
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, _, state = item.partition(":")
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid admin entry '{item}'")
        if name in seen:
            raise ValueError(f"Admin '{name}' listed twice")
        seen.add(name)
        admins.append((name, _parse_state(state) if state else False))
    return tuple(admins)


def parse_presets(raw: str) -> Tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(";") if p.strip())


def load_config(environ: Optional[Mapping[str, str]] = None) -> NotifierConfig:
    env = os.environ if environ is None else environ
    port = int(env.get("NOTIFIER_PORT", "5000"))
    if not 0 < port < 65536:
        raise ValueError(f"NOTIFIER_PORT out of range: {port}")
    queue_size = int(env.get("NOTIFIER_STREAM_QUEUE_SIZE", "100"))
    if queue_size < 0:
        raise ValueError("NOTIFIER_STREAM_QUEUE_SIZE must be >= 0")
    return NotifierConfig(
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
        admins=parse_admins(env.get("NOTIFIER_ADMINS", DEFAULT_ADMINS)),
        presets=parse_presets(env.get("NOTIFIER_PRESETS", ";".join(DEFAULT_PRESETS))),
        host=env.get("NOTIFIER_HOST", "0.0.0.0").strip(),
        port=port,
        stream_queue_size=queue_size,
    )
