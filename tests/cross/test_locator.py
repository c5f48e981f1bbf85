"""
Tests for Android NDK and osxcross discovery.
"""

import os
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from nativetoolchains.core.probe import PathProbe
from nativetoolchains.cross.locator import ToolkitKind, ToolkitLocation, ToolkitLocator
from tests.fixtures.toolkits import make_android_ndk, make_osxcross


def _prebuilt_bin(root: Path, host: str = "linux-x86_64") -> Path:
    return root / "toolchains" / "llvm" / "prebuilt" / host / "bin"


class TestAndroidNdkDiscovery:
    """Tests for locate_android_ndk."""

    def test_working_directory_match(self, workdir, empty_probe, android_ndk):
        """An 'android-ndk*' directory in the working directory is used."""
        location = ToolkitLocator(workdir, empty_probe).locate_android_ndk()

        assert location is not None
        assert location.kind is ToolkitKind.ANDROID_NDK
        assert location.bin_dir == _prebuilt_bin(android_ndk)
        assert location.source == "working-directory"
        assert location.extra_includes == android_ndk / "sysroot" / "usr" / "include"

    def test_cxx_includes(self, workdir, empty_probe, android_ndk):
        location = ToolkitLocator(workdir, empty_probe).locate_android_ndk()

        expected = (
            _prebuilt_bin(android_ndk).parent / "sysroot" / "usr" / "include" / "c++" / "v1"
        )
        assert location.cxx_includes == expected

    def test_property_beats_working_directory(self, workdir, tmp_path, android_ndk):
        """The androidNdk property wins over a working-directory match."""
        other = make_android_ndk(tmp_path, name="ndk-from-property")
        probe = PathProbe(environ={}, properties={"androidNdk": str(other)}, search_path="")

        location = ToolkitLocator(workdir, probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(other)
        assert location.source == "property:androidNdk"

    def test_property_beats_environment(self, workdir, tmp_path):
        from_property = make_android_ndk(tmp_path, name="a")
        from_env = make_android_ndk(tmp_path, name="b")
        probe = PathProbe(
            environ={"ANDROID_NDK_ROOT": str(from_env)},
            properties={"androidNdk": str(from_property)},
            search_path="",
        )

        location = ToolkitLocator(workdir, probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(from_property)

    def test_ndk_root_beats_ndk_home(self, workdir, tmp_path):
        root = make_android_ndk(tmp_path, name="root")
        home = make_android_ndk(tmp_path, name="home")
        probe = PathProbe(
            environ={"ANDROID_NDK_ROOT": str(root), "ANDROID_NDK_HOME": str(home)},
            search_path="",
        )

        location = ToolkitLocator(workdir, probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(root)
        assert location.source == "env:ANDROID_NDK_ROOT"

    def test_ndk_home_alias(self, workdir, tmp_path):
        home = make_android_ndk(tmp_path, name="home")
        probe = PathProbe(environ={"ANDROID_NDK_HOME": str(home)}, search_path="")

        location = ToolkitLocator(workdir, probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(home)
        assert location.source == "env:ANDROID_NDK_HOME"

    def test_nonexistent_property_is_unavailable(self, workdir, tmp_path, diagnostics):
        """A broken override is reported, not replaced by a later source."""
        make_android_ndk(workdir)
        probe = PathProbe(
            environ={}, properties={"androidNdk": str(tmp_path / "missing")}, search_path=""
        )

        locator = ToolkitLocator(workdir, probe, diagnostics.append)

        assert locator.locate_android_ndk() is None
        assert len(diagnostics) == 1
        assert "toolchains/llvm/prebuilt" in diagnostics[0]

    def test_no_prebuilt_children(self, workdir, empty_probe, diagnostics):
        (workdir / "android-ndk-r21" / "toolchains" / "llvm" / "prebuilt").mkdir(parents=True)

        locator = ToolkitLocator(workdir, empty_probe, diagnostics.append)

        assert locator.locate_android_ndk() is None
        assert "prebuilt LLVM toolchain" in diagnostics[0]

    def test_first_sorted_prebuilt_host(self, workdir, empty_probe):
        root = make_android_ndk(workdir, host="linux-x86_64")
        (root / "toolchains" / "llvm" / "prebuilt" / "darwin-x86_64" / "bin").mkdir(parents=True)

        location = ToolkitLocator(workdir, empty_probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(root, "darwin-x86_64")

    def test_not_found_names_every_override(self, workdir, empty_probe, diagnostics):
        locator = ToolkitLocator(workdir, empty_probe, diagnostics.append)

        assert locator.locate_android_ndk() is None
        assert len(diagnostics) == 1
        message = diagnostics[0]
        assert "No Android NDK found" in message
        assert "ANDROID_NDK_ROOT" in message
        assert "ANDROID_NDK_HOME" in message
        assert "-DandroidNdk" in message

    def test_files_with_prefix_are_ignored(self, workdir, empty_probe):
        (workdir / "android-ndk-r21.zip").write_bytes(b"")
        assert ToolkitLocator(workdir, empty_probe).locate_android_ndk() is None

    def test_working_directory_match_checked_through_probe(self, workdir, empty_probe, android_ndk):
        with patch.object(empty_probe, "is_directory", return_value=False) as is_directory:
            location = ToolkitLocator(workdir, empty_probe, lambda message: None).locate_android_ndk()

        assert location is None
        is_directory.assert_called_once_with(android_ndk)

    def test_missing_working_directory(self, tmp_path, empty_probe):
        locator = ToolkitLocator(tmp_path / "missing", empty_probe, lambda message: None)
        assert locator.locate_android_ndk() is None

    def test_default_sink_logs_warning(self, workdir, empty_probe, caplog):
        with caplog.at_level("WARNING"):
            ToolkitLocator(workdir, empty_probe).locate_android_ndk()

        assert "No Android NDK found" in caplog.text

    def test_relative_property_resolves_against_working_directory(
        self, workdir, tmp_path, monkeypatch, diagnostics
    ):
        ndk = make_android_ndk(workdir, name="ndk")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        probe = PathProbe(environ={}, properties={"androidNdk": "ndk"}, search_path="")

        location = ToolkitLocator(workdir, probe, diagnostics.append).locate_android_ndk()

        assert location is not None
        assert location.bin_dir == _prebuilt_bin(ndk)
        assert location.extra_includes == ndk / "sysroot" / "usr" / "include"
        assert diagnostics == []

    def test_relative_environment_resolves_against_working_directory(
        self, workdir, tmp_path, monkeypatch
    ):
        ndk = make_android_ndk(workdir, name="sdk-ndk")
        monkeypatch.chdir(tmp_path)
        probe = PathProbe(environ={"ANDROID_NDK_HOME": "sdk-ndk"}, search_path="")

        location = ToolkitLocator(workdir, probe).locate_android_ndk()

        assert location.bin_dir == _prebuilt_bin(ndk)


class TestOsxcrossDiscovery:
    """Tests for locate_osxcross."""

    def test_property(self, workdir):
        probe = PathProbe(
            environ={}, properties={"osxcrossBin": "/opt/osxcross/target/bin"}, search_path=""
        )

        location = ToolkitLocator(workdir, probe).locate_osxcross()

        assert location.bin_dir == Path("/opt/osxcross/target/bin").absolute()
        assert location.source == "property:osxcrossBin"
        assert location.sdk_path is None

    def test_working_directory_match(self, workdir, empty_probe, osxcross):
        location = ToolkitLocator(workdir, empty_probe).locate_osxcross()

        assert location.bin_dir == osxcross / "target" / "bin"
        assert location.binutils_dir == osxcross / "target" / "binutils" / "bin"
        assert location.source == "working-directory"

    def test_sdk_path_is_first_sorted_entry(self, workdir, empty_probe):
        root = make_osxcross(workdir, sdks=("MacOSX10.15.sdk", "MacOSX10.14.sdk"))

        location = ToolkitLocator(workdir, empty_probe).locate_osxcross()

        assert location.sdk_path == root / "target" / "SDK" / "MacOSX10.14.sdk"

    def test_missing_sdk_directory(self, workdir, empty_probe):
        make_osxcross(workdir, sdks=())

        location = ToolkitLocator(workdir, empty_probe).locate_osxcross()

        assert location is not None
        assert location.sdk_path is None

    def test_empty_sdk_directory(self, workdir, empty_probe):
        root = make_osxcross(workdir, sdks=())
        (root / "target" / "SDK").mkdir()

        assert ToolkitLocator(workdir, empty_probe).locate_osxcross().sdk_path is None

    @pytest.mark.skipif(os.name == "nt", reason="POSIX executable bits")
    def test_search_path(self, workdir, tmp_path):
        bin_dir = tmp_path / "osx" / "bin"
        bin_dir.mkdir(parents=True)
        xcrun = bin_dir / "xcrun"
        xcrun.write_text("#!/bin/sh\n")
        xcrun.chmod(0o755)
        probe = PathProbe(environ={}, search_path=str(bin_dir))

        location = ToolkitLocator(workdir, probe).locate_osxcross()

        assert location.bin_dir == bin_dir
        assert location.source == "search-path"

    def test_working_directory_beats_search_path(self, workdir, osxcross):
        probe = PathProbe(environ={}, search_path="")
        with patch.object(probe, "find_on_search_path") as find:
            location = ToolkitLocator(workdir, probe).locate_osxcross()

        assert location.source == "working-directory"
        find.assert_not_called()

    def test_not_found(self, workdir, empty_probe, diagnostics):
        locator = ToolkitLocator(workdir, empty_probe, diagnostics.append)

        assert locator.locate_osxcross() is None
        assert "No osxcross found" in diagnostics[0]
        assert "-DosxcrossBin" in diagnostics[0]
        assert "PATH" in diagnostics[0]

    def test_property_beats_working_directory(self, workdir, tmp_path, osxcross):
        """The osxcrossBin property wins over a working-directory match."""
        other = make_osxcross(tmp_path, name="osxcross-from-property", sdks=("MacOSX11.0.sdk",))
        bin_dir = other / "target" / "bin"
        probe = PathProbe(environ={}, properties={"osxcrossBin": str(bin_dir)}, search_path="")

        location = ToolkitLocator(workdir, probe).locate_osxcross()

        assert location.source == "property:osxcrossBin"
        assert location.bin_dir == bin_dir
        assert location.sdk_path == other / "target" / "SDK" / "MacOSX11.0.sdk"

    def test_relative_property_resolves_against_working_directory(
        self, workdir, tmp_path, osxcross, monkeypatch
    ):
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        probe = PathProbe(
            environ={}, properties={"osxcrossBin": "osxcross/target/bin"}, search_path=""
        )

        location = ToolkitLocator(workdir, probe).locate_osxcross()

        assert location.bin_dir == osxcross / "target" / "bin"
        assert location.sdk_path == osxcross / "target" / "SDK" / "MacOSX10.15.sdk"


class TestMemoization:
    """Tests for write-once caching."""

    def test_cached_without_reprobing(self, workdir, empty_probe, android_ndk):
        locator = ToolkitLocator(workdir, empty_probe)
        first = locator.locate_android_ndk()

        with patch.object(empty_probe, "list_children") as list_children:
            second = locator.locate(ToolkitKind.ANDROID_NDK)

        assert first is second
        list_children.assert_not_called()

    def test_later_install_is_not_picked_up(self, workdir, empty_probe, diagnostics):
        locator = ToolkitLocator(workdir, empty_probe, diagnostics.append)
        assert locator.locate_android_ndk() is None

        make_android_ndk(workdir)

        assert locator.locate_android_ndk() is None
        assert len(diagnostics) == 1

    def test_concurrent_callers_probe_once(self, workdir, empty_probe, android_ndk):
        locator = ToolkitLocator(workdir, empty_probe)
        results = []
        calls = []
        original = locator._resolve_android_ndk

        def counting_resolve():
            calls.append(1)
            return original()

        locator._resolve_android_ndk = counting_resolve

        threads = [
            threading.Thread(target=lambda: results.append(locator.locate_android_ndk()))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)


class TestToolkitLocation:
    """Tests for ToolkitLocation."""

    def test_str(self):
        location = ToolkitLocation(ToolkitKind.OSXCROSS, Path("/opt/bin"), "search-path")
        assert "osxcross" in str(location)
        assert "search-path" in str(location)
