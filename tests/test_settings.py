"""Unit tests for DumpSettings persistence."""

import pytest
from PySide6.QtCore import QSettings

from patchdump.settings import DumpSettings, load_settings, open_ini


class TestDumpSettings:
    """Tests for DumpSettings."""

    def test_defaults(self):
        settings = DumpSettings()
        assert settings.extension == ".json"
        assert settings.context_lines == 3
        assert settings.header_prefix == ""

    def test_extension_gets_dot(self):
        assert DumpSettings(extension="json").extension == ".json"

    def test_negative_context_rejected(self):
        with pytest.raises(ValueError):
            DumpSettings(context_lines=-1)

    def test_roundtrip_through_ini(self, tmp_path):
        path = str(tmp_path / "patchdump.ini")
        original = DumpSettings(output_root="out", context_lines=5, header_prefix="dump/server",
                                dump_pre_patch=False)
        original.save_to_qsettings(open_ini(path))

        loaded = DumpSettings.from_qsettings(open_ini(path))
        assert loaded == original

    def test_missing_values_use_defaults(self, tmp_path):
        loaded = DumpSettings.from_qsettings(open_ini(str(tmp_path / "empty.ini")))
        assert loaded == DumpSettings()

    def test_ini_written_by_hand(self, tmp_path):
        path = tmp_path / "hand.ini"
        path.write_text("[dump]\ncontext_lines=1\nextension=.json5\ndump_post_patch=false\n")

        loaded = DumpSettings.from_qsettings(QSettings(str(path), QSettings.Format.IniFormat))
        assert loaded.context_lines == 1
        assert loaded.extension == ".json5"
        assert loaded.dump_post_patch is False


class TestLoadSettings:

    def test_without_file(self):
        assert load_settings(None, output_root="x") == DumpSettings(output_root="x")

    def test_none_overrides_ignored(self, tmp_path):
        path = tmp_path / "s.ini"
        path.write_text("[dump]\ncontext_lines=7\n")
        settings = load_settings(str(path), context_lines=None, output_root="y")
        assert settings.context_lines == 7
        assert settings.output_root == "y"
