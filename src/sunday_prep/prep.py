"""
Sunday Prep — make sure every Sunday of a month has its presentation

What it does:
1) Enumerate the Sundays of the target month.
2) For each Sunday, look for an existing "<YYYY-MM-DD> TODO" draft or a
   finished "<YYYY-MM-DD>" file and leave it alone if there is one.
3) Otherwise copy the template (copy mode), or copy it into a dated folder
   and drop a TODO shortcut next to the template (shortcut mode).

Nothing is written unless `write` is set; a dry run only reports.
"""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from config.settings import (
    EXTENSION,
    OUTPUT_DIR,
    SHORTCUT_DESCRIPTION,
    SHORTCUT_EXT,
    TEMPLATE_DIR,
    TEMPLATE_FILE,
    TODO_SUFFIX,
)
from sunday_prep.errors import TemplateNotFound
from sunday_prep.pathnorm import expand_env
from sunday_prep.shortcuts import ShortcutStore, WindowsShortcutStore, create_shortcut, fix_existing_shortcuts
from sunday_prep.sundays import sunday_stamp, sundays_in_month

log = logging.getLogger("sunday_prep")

# ----------------------------- MODELS ---------------------------------


class PrepConfig(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1, le=9999)
    template_file: str = Field(default=TEMPLATE_FILE)
    template_dir: str = Field(default=TEMPLATE_DIR)
    output_dir: str = Field(default=OUTPUT_DIR)
    ext: str = Field(default=EXTENSION)
    write: bool = Field(default=False)
    mode: Literal["copy", "shortcut"] = Field(default="copy")

    @property
    def template_path(self) -> Path:
        return Path(expand_env(self.template_dir)) / self.template_file

    @property
    def suffix(self) -> str:
        return "." + self.ext.lstrip(".")


@dataclass
class PrepReport:
    created: List[str] = field(default_factory=list)
    planned: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


# ----------------------------- UTILS ----------------------------------


def find_template(cfg: PrepConfig) -> Path:
    path = cfg.template_path
    if not path.is_file():
        raise TemplateNotFound(f"'{cfg.template_file}' not found in '{cfg.template_dir}'")
    log.info(f"Found template: {path}")
    return path


def sunday_stamps(cfg: PrepConfig) -> List[str]:
    return [sunday_stamp(cfg.year, cfg.month, d) for d in sundays_in_month(cfg.month, cfg.year)]


def existing_variant(directory: Path, stamp: str, suffix: str) -> Optional[Path]:
    """The TODO draft or finished file for `stamp`, whichever exists."""
    for name in (f"{stamp}{TODO_SUFFIX}{suffix}", f"{stamp}{suffix}"):
        candidate = directory / name
        if candidate.exists():
            return candidate
    return None


# ----------------------------- VARIANTS -------------------------------


def prep_copies(cfg: PrepConfig) -> PrepReport:
    """Copy the template to '<stamp> TODO.<ext>' beside it for each new Sunday."""
    report = PrepReport()
    template = cfg.template_path
    directory = template.parent

    for stamp in sunday_stamps(cfg):
        found = existing_variant(directory, stamp, cfg.suffix)
        if found is not None:
            log.info(f"'{found.name}' already exists, not overwriting")
            report.skipped.append(stamp)
            continue

        dest = directory / f"{stamp}{TODO_SUFFIX}{cfg.suffix}"
        if not cfg.write:
            log.info(f"Will copy '{cfg.template_file}' to '{dest}'")
            report.planned.append(stamp)
            continue

        log.info(f"Copying '{cfg.template_file}' to '{dest.name}'")
        try:
            shutil.copyfile(template, dest)
        except OSError as e:
            log.error(f"Failed to copy template for {stamp}: {e}")
            report.failed.append(stamp)
            continue
        report.created.append(stamp)
    return report


def prep_shortcuts(cfg: PrepConfig, store: Optional[ShortcutStore] = None) -> PrepReport:
    """Copy the template into '<output>/<YYYYMMDD>/<stamp>.<ext>' and point a
    '<stamp> TODO.lnk' shortcut beside the template at it.

    A copy that is already in place is kept; only the shortcut is added.
    Shortcut targets are built from the configured output_dir, so a
    %VAR% placeholder there survives into the shortcut.
    """
    # a dry run never touches shortcut metadata
    if store is None and cfg.write:
        store = WindowsShortcutStore()

    report = PrepReport()
    template = cfg.template_path
    shortcut_dir = template.parent
    output_root = Path(expand_env(cfg.output_dir))

    for stamp in sunday_stamps(cfg):
        found = existing_variant(shortcut_dir, stamp, SHORTCUT_EXT)
        if found is not None:
            log.info(f"'{found.name}' already exists, not overwriting")
            report.skipped.append(stamp)
            continue

        folder_name = stamp.replace("-", "")
        file_name = f"{stamp}{cfg.suffix}"
        folder = output_root / folder_name
        dest = folder / file_name
        target = Path(cfg.output_dir) / folder_name / file_name
        if not cfg.write:
            log.info(f"Will copy '{cfg.template_file}' to '{dest}'")
            report.planned.append(stamp)
            continue

        try:
            folder.mkdir(parents=True, exist_ok=True)
            if dest.exists():
                log.info(f"'{dest}' already exists, not overwriting")
            else:
                log.info(f"Copying '{cfg.template_file}' to '{dest}'")
                shutil.copyfile(template, dest)
        except OSError as e:
            log.error(f"Failed to copy template for {stamp}: {e}")
            report.failed.append(stamp)
            continue

        fix_existing_shortcuts(store, folder)
        link = shortcut_dir / f"{stamp}{TODO_SUFFIX}{SHORTCUT_EXT}"
        if create_shortcut(store, link, SHORTCUT_DESCRIPTION.format(stamp=stamp), str(target)):
            report.created.append(stamp)
        else:
            report.failed.append(stamp)
    return report


def run(cfg: PrepConfig, store: Optional[ShortcutStore] = None) -> PrepReport:
    """Check the template, then prepare every Sunday of cfg.month/cfg.year.

    Raises TemplateNotFound before touching anything when the template is
    missing.
    """
    find_template(cfg)
    if cfg.mode == "copy":
        report = prep_copies(cfg)
    else:
        report = prep_shortcuts(cfg, store)
    log.info(
        f"Done: {len(report.created)} created, {len(report.planned)} planned, "
        f"{len(report.skipped)} existing, {len(report.failed)} failed"
    )
    return report
