from __future__ import annotations
import os
from pathlib import Path
from typing import Literal, Optional

Mode = Literal['corrected', 'faithful']

MODES = ('corrected', 'faithful')

# Defaults
_DEFAULT_MODE: Mode = 'corrected'
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = 'vhisp% '
_DEFAULT_HISTORY_FILE = Path.home() / '.vhisp_history'


def get_mode(override: Optional[str] = None) -> Mode:
    """Builtin behaviour for `len` and `^`: 'corrected' (default) or 'faithful'."""
    raw = override or os.environ.get('VHISP_MODE') or _DEFAULT_MODE
    mode = raw.strip().lower()
    if mode not in MODES:
        raise ValueError(f"Unknown mode {raw!r}; expected one of {', '.join(MODES)}")
    return mode  # type: ignore[return-value]


def get_log_level() -> str:
    return os.environ.get('VHISP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL


def get_prompt() -> str:
    return os.environ.get('VHISP_PROMPT', _DEFAULT_PROMPT)


def get_history_file() -> Optional[Path]:
    # set but empty disables history persistence
    raw = os.environ.get('VHISP_HISTORY_FILE')
    if raw is None:
        return _DEFAULT_HISTORY_FILE
    raw = raw.strip()
    return Path(raw).expanduser() if raw else None
