"""
Rewrite absolute OneDrive paths into the portable %OneDriveConsumer% form.

Shortcuts created on one machine point at C:\\Users\\<name>\\OneDrive\\...;
the same files live under a different user folder on the next machine, so
targets are stored with the OneDriveConsumer environment variable instead.
"""
from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from config.settings import ONEDRIVE_PLACEHOLDER

# (a) C:\Users\alice\OneDrive  (b) %USERPROFILE%\OneDrive  (c) the placeholder itself
ONEDRIVE_RE = re.compile(
    r"(?:[A-Z]:\\Users\\\w+|%USERPROFILE%)\\OneDrive|" + re.escape(ONEDRIVE_PLACEHOLDER),
    re.IGNORECASE,
)
ENV_VAR_RE = re.compile(r"%([^%]+)%")


def normalize(path: Optional[str]) -> str:
    """Replace every OneDrive root in `path` with the placeholder token.

    Paths without a OneDrive root come back unchanged, and normalizing an
    already normalized path is a no-op.
    """
    return ONEDRIVE_RE.sub(lambda _m: ONEDRIVE_PLACEHOLDER, path or "")


def escape_placeholders(path: str) -> str:
    """Caret-escape the placeholder (^%OneDriveConsumer^%) for back-ends that
    run through cmd.exe and would expand it before it is stored."""
    name = ONEDRIVE_PLACEHOLDER.strip("%")
    return re.sub(
        re.escape(ONEDRIVE_PLACEHOLDER),
        lambda _m: f"^%{name}^%",
        path,
        flags=re.IGNORECASE,
    )


def expand_env(path: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Substitute %NAME% tokens with their environment values.

    Unknown variables are left as they are.
    """
    env = os.environ if environ is None else environ

    def _sub(m: re.Match) -> str:
        value = env.get(m.group(1))
        return value if value is not None else m.group(0)

    return ENV_VAR_RE.sub(_sub, path)
