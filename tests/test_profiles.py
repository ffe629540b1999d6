"""Tests for product-line profiles and the profile registry."""

from pathlib import Path

import pytest

from deadcodechange.config.loader import ConfigError
from deadcodechange.profiles.builtin import ALL_BUILTIN_PROFILES
from deadcodechange.profiles.models import Profile
from deadcodechange.profiles.registry import ProfileRegistry, build_registry


class TestBuiltinProfiles:
    def test_all_registered(self):
        registry = build_registry()
        assert [p.id for p in registry.all_profiles] == ["linux", "coreboot", "busybox"]
        assert len(ALL_BUILTIN_PROFILES) == 3

    @pytest.mark.parametrize("profile_id,path", [
        ("linux", "Kconfig"),
        ("linux", "drivers/net/Kconfig"),
        ("linux", "arch/x86/Kconfig.debug"),
        ("coreboot", "src/mainboard/Kconfig"),
        ("busybox", "networking/Config.src"),
        ("busybox", "Config.in"),
    ])
    def test_vm_files(self, profile_id, path):
        assert build_registry().get(profile_id).vm_pattern.fullmatch(path)

    @pytest.mark.parametrize("profile_id,path", [
        ("linux", "Makefile"),
        ("linux", "drivers/Kbuild"),
        ("linux", "arch/arm/Makefile.boot"),
        ("coreboot", "src/Makefile.inc"),
        ("coreboot", "src/arch/Makefile.mk"),
        ("busybox", "networking/Kbuild.src"),
    ])
    def test_build_files(self, profile_id, path):
        assert build_registry().get(profile_id).build_pattern.fullmatch(path)

    @pytest.mark.parametrize("profile_id,path,expected", [
        ("linux", "arch/x86/boot/head.S", True),
        ("linux", "include/linux/foo.h", True),
        ("linux", "drivers/foo.cpp", False),
        ("coreboot", "src/acpi/dsdt.asl", True),
        ("busybox", "archival/tar.c", True),
        ("busybox", "arch/start.S", False),
    ])
    def test_code_files(self, profile_id, path, expected):
        matched = build_registry().get(profile_id).code_pattern.fullmatch(path) is not None
        assert matched is expected

    def test_pattern_compiled_once(self):
        profile = Profile("p", "P", "", "Kconfig", r".*\.c", "Makefile")
        assert profile.code_pattern is profile.code_pattern


class TestCustomProfiles:
    def test_load_list(self, tmp_path: Path):
        (tmp_path / "mine.yaml").write_text(
            "- id: uclibc\n"
            "  name: uClibc\n"
            "  vm_files_regex: 'extra/Configs/Config\\..*'\n"
            "  code_files_regex: '.*\\.[ch]'\n"
            "  build_files_regex: '(?:.*/)?Makefile.*'\n"
        )
        registry = ProfileRegistry()
        assert registry.load_custom_profiles(tmp_path) == 1
        profile = registry.get("uclibc")
        assert profile.name == "uClibc"
        assert profile.vm_pattern.fullmatch("extra/Configs/Config.in")

    def test_single_mapping_replaces_builtin(self, tmp_path: Path):
        profiles_dir = tmp_path / ".deadcodechange-profiles"
        profiles_dir.mkdir()
        (profiles_dir / "linux.yml").write_text(
            "id: linux\n"
            "vm_files_regex: Kconfig\n"
            "code_files_regex: '.*\\.c'\n"
            "build_files_regex: Kbuild\n"
        )
        registry = build_registry(tmp_path)
        linux = registry.get("linux")
        assert linux.name == "linux"
        assert linux.build_files_regex == "Kbuild"
        assert "coreboot" in registry

    def test_missing_keys(self, tmp_path: Path):
        (tmp_path / "bad.yaml").write_text("id: broken\nvm_files_regex: Kconfig\n")
        with pytest.raises(ConfigError, match="code_files_regex"):
            ProfileRegistry().load_custom_profiles(tmp_path)

    def test_malformed_yaml(self, tmp_path: Path):
        (tmp_path / "bad.yaml").write_text("id: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to read"):
            ProfileRegistry().load_custom_profiles(tmp_path)

    def test_empty_file_and_other_suffixes(self, tmp_path: Path):
        (tmp_path / "empty.yaml").write_text("")
        (tmp_path / "notes.md").write_text("id: x")
        assert ProfileRegistry().load_custom_profiles(tmp_path) == 0

    def test_missing_directory(self, tmp_path: Path):
        assert ProfileRegistry().load_custom_profiles(tmp_path / "nope") == 0
