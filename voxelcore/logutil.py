import os
import logging

from voxelcore import config

logger = logging.getLogger('voxelcore')

_frame_id = None

# Scopes that can be silenced through config; warnings and errors always pass.
_SCOPE_SWITCHES = {
    'REGION': 'LOG_REGIONS',
    'MESH': 'LOG_MESH',
    'INTERACT': 'LOG_INTERACTION',
}

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'ERROR': logging.ERROR,
}


def set_frame(frame_id):
    global _frame_id
    _frame_id = frame_id


def log(scope, msg, level="INFO"):
    levelno = _LEVELS.get(level, logging.INFO)
    switch = _SCOPE_SWITCHES.get(scope)
    if switch is not None and levelno < logging.WARNING and not getattr(config, switch, True):
        return
    if not logger.isEnabledFor(levelno):
        return
    frame = _frame_id
    frame_tag = f" f{frame}" if frame is not None else ""
    text = f"[{level}{frame_tag} {scope}] {msg}"
    use_color = getattr(config, "LOG_COLOR", True) and os.getenv("NO_COLOR") is None
    if use_color:
        if levelno >= logging.ERROR:
            text = f"\x1b[31m{text}\x1b[0m"
        elif levelno >= logging.WARNING:
            text = f"\x1b[33m{text}\x1b[0m"
    logger.log(levelno, text)
