"""Dump configuration.

Settings are persisted through QSettings, either in the host application's
native store or in an INI file passed on the command line.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict

from PySide6.QtCore import QSettings

SETTINGS_GROUP = "dump"


@dataclass
class DumpSettings:
    """Options controlling where and how snapshots are dumped.

    Attributes:
        output_root: Directory that receives pre-patch/, post-patch/ and diffs/
        extension: Only documents with this extension are captured
        context_lines: Context lines around every diff hunk
        header_prefix: Prefix of the ``---``/``+++`` paths in diff files
        dump_pre_patch: Write the pre-patch dump tree
        dump_post_patch: Write the post-patch dump tree
    """

    output_root: str = "dump"
    extension: str = ".json"
    context_lines: int = 3
    header_prefix: str = ""
    dump_pre_patch: bool = True
    dump_post_patch: bool = True

    def __post_init__(self):
        if self.context_lines < 0:
            raise ValueError(f"context_lines must not be negative: {self.context_lines}")
        if self.extension and not self.extension.startswith("."):
            self.extension = "." + self.extension

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_qsettings(cls, settings: QSettings) -> "DumpSettings":
        """Read settings from the ``dump`` group, falling back to defaults."""
        defaults = cls()
        settings.beginGroup(SETTINGS_GROUP)
        try:
            return cls(
                output_root=str(settings.value("output_root", defaults.output_root)),
                extension=str(settings.value("extension", defaults.extension)),
                context_lines=max(0, int(settings.value("context_lines", defaults.context_lines, type=int))),
                header_prefix=str(settings.value("header_prefix", defaults.header_prefix) or ""),
                dump_pre_patch=bool(settings.value("dump_pre_patch", defaults.dump_pre_patch, type=bool)),
                dump_post_patch=bool(settings.value("dump_post_patch", defaults.dump_post_patch, type=bool)),
            )
        finally:
            settings.endGroup()

    def save_to_qsettings(self, settings: QSettings) -> None:
        settings.beginGroup(SETTINGS_GROUP)
        try:
            for key, value in self.to_dict().items():
                settings.setValue(key, value)
        finally:
            settings.endGroup()
        settings.sync()


def open_ini(path: str) -> QSettings:
    return QSettings(path, QSettings.Format.IniFormat)


def load_settings(path: str | None = None, **overrides) -> DumpSettings:
    """Load settings from an INI file and apply keyword overrides.

    Overrides whose value is None are ignored so command line options that
    were not given keep the file's value.
    """
    settings = DumpSettings.from_qsettings(open_ini(path)) if path else DumpSettings()
    values = settings.to_dict()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return DumpSettings(**values)
