from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Protocol

from config.settings import SHORTCUT_EXT
from sunday_prep.errors import ShortcutMetadataError
from sunday_prep.pathnorm import escape_placeholders, normalize

log = logging.getLogger("sunday_prep.shortcuts")

# WScript WindowStyle values
NORMAL = 1
MAXIMIZED = 3
MINIMIZED = 7


@dataclass(frozen=True)
class ShortcutOptions:
    target: str = ""
    working_dir: str = ""
    description: str = ""
    run_style: int = NORMAL


class ShortcutStore(Protocol):
    """Where .lnk metadata is read from and written to.

    Every method raises ShortcutMetadataError on failure.
    """
    expands_variables: bool

    def create(self, path: Path, options: ShortcutOptions) -> None: ...

    def query(self, path: Path) -> ShortcutOptions: ...

    def edit(self, path: Path, options: ShortcutOptions) -> None: ...


class WindowsShortcutStore:
    """Shortcut metadata through the WScript.Shell COM object (Windows only)."""

    # COM properties are stored as given; no cmd.exe in between
    expands_variables = False

    def __init__(self):
        if sys.platform != "win32":
            raise ShortcutMetadataError("Windows shortcuts can only be managed on Windows")
        import pywintypes
        import win32com.client

        self._com_error = pywintypes.com_error
        self._shell = win32com.client.Dispatch("WScript.Shell")

    def _save(self, path: Path, options: ShortcutOptions) -> None:
        try:
            sc = self._shell.CreateShortCut(str(path))
            sc.TargetPath = options.target
            sc.WorkingDirectory = options.working_dir
            sc.Description = options.description
            sc.WindowStyle = options.run_style
            sc.Save()
        except self._com_error as e:
            raise ShortcutMetadataError(f"could not write {path}: {e}") from e

    def create(self, path: Path, options: ShortcutOptions) -> None:
        self._save(path, options)

    def query(self, path: Path) -> ShortcutOptions:
        # CreateShortCut happily opens a missing file as a blank shortcut
        if not Path(path).is_file():
            raise ShortcutMetadataError(f"no shortcut at {path}")
        try:
            sc = self._shell.CreateShortCut(str(path))
            return ShortcutOptions(
                target=sc.TargetPath or "",
                working_dir=sc.WorkingDirectory or "",
                description=sc.Description or "",
                run_style=int(sc.WindowStyle or NORMAL),
            )
        except self._com_error as e:
            raise ShortcutMetadataError(f"could not read {path}: {e}") from e

    def edit(self, path: Path, options: ShortcutOptions) -> None:
        if not Path(path).is_file():
            raise ShortcutMetadataError(f"no shortcut at {path}")
        self._save(path, options)


def shortcut_target(store: ShortcutStore, target: str) -> str:
    """Portable form of `target` as it should be handed to `store`."""
    target = normalize(target)
    if store.expands_variables:
        target = escape_placeholders(target)
    return target


def create_shortcut(store: ShortcutStore, filename: Path, description: str, target: str) -> bool:
    options = ShortcutOptions(
        target=shortcut_target(store, target),
        description=description,
        run_style=NORMAL,
    )
    try:
        store.create(Path(filename), options)
    except ShortcutMetadataError as e:
        log.error(f"Error creating shortcut {filename}: {e}")
        return False
    log.debug(f"Created shortcut {filename} -> {options.target}")
    return True


def fix_shortcut(store: ShortcutStore, path: Path) -> bool:
    """Rewrite the absolute OneDrive paths of one shortcut.

    The shortcut is only written back when its metadata could be read.
    """
    try:
        options = store.query(Path(path))
    except ShortcutMetadataError as e:
        log.warning(f"Error querying shortcut options {path}: {e}")
        return False

    changes = {}
    if options.target:
        changes["target"] = shortcut_target(store, options.target)
    if options.working_dir:
        changes["working_dir"] = shortcut_target(store, options.working_dir)

    try:
        store.edit(Path(path), replace(options, **changes))
    except ShortcutMetadataError as e:
        log.warning(f"Error editing shortcut {path}: {e}")
        return False
    return True


def list_shortcuts(directory: Path) -> list[Path]:
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() == SHORTCUT_EXT
    )


def fix_existing_shortcuts(store: ShortcutStore, directory: Path) -> int:
    """Repair every .lnk in `directory`; returns how many were examined.

    A shortcut that cannot be read or written is logged and skipped.
    """
    shortcuts = list_shortcuts(directory)
    fixed = 0
    for path in shortcuts:
        if fix_shortcut(store, path):
            fixed += 1
    log.info(f"Checked {len(shortcuts)} shortcut(s) in {directory}, rewrote {fixed}")
    return len(shortcuts)
