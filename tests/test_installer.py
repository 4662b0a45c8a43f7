"""Tests for the release installation pipeline (downloads are faked with local archives)."""

import io
import shutil
import stat
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from jdk_resolver import ExtractionError
from jdk_resolver import HostPlatform
from jdk_resolver import LayoutError
from jdk_resolver import NoMatchError
from jdk_resolver import ParseError
from jdk_resolver import ReleaseEntry
from jdk_resolver import UnsupportedFormatError
from jdk_resolver import install
from jdk_resolver import install_archive
from jdk_resolver import install_release
from jdk_resolver import parse_version
from jdk_resolver import resolve_release

LINUX_X64 = HostPlatform(os="linux", arch="x64")


def make_entry(version, *, os="linux", url=None, lts=True):
    return ReleaseEntry(
        raw_version=version,
        spec=parse_version(version, concrete=True),
        os=os,
        arch="x64",
        is_lts=lts,
        download_url=url or f"https://example.com/OpenJDK-jdk_x64_{os}_{version}.tar.gz",
        provider="test",
    )


def build_tar_gz(path: Path, wrapper: str | None = "jdk-17.0.5+8", executable: str = "java") -> Path:
    """Write a JDK-shaped .tar.gz; wrapper=None produces a flat archive."""
    prefix = f"{wrapper}/" if wrapper else ""
    members = {
        f"{prefix}bin/{executable}": b"launcher",
        f"{prefix}lib/modules": b"modules",
        f"{prefix}release": b'JAVA_VERSION="17.0.5"',
    }
    with tarfile.open(path, "w:gz") as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(data))
    return path


class FakeDownload:
    """Stand-in for download_file that copies a prepared archive."""

    def __init__(self, archive: Path):
        self.archive = archive
        self.urls: list[str] = []
        self.destinations: list[Path] = []

    def __call__(self, url, destination, *, progress=None, **kwargs):
        self.urls.append(url)
        self.destinations.append(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.archive, destination)
        if progress is not None:
            size = destination.stat().st_size
            progress(size, size)
        return destination


def hidden_entries(directory: Path) -> list[str]:
    return [p.name for p in directory.iterdir() if p.name.startswith(".")]


def test_install_release_nested_archive():
    """Test a wrapped archive ends up flattened at versions/<version>."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        fake = FakeDownload(build_tar_gz(base / "src.tar.gz"))
        versions = base / "versions"
        entry = make_entry("17.0.5+8")

        with patch("jdk_resolver.installer.download_file", side_effect=fake):
            root = install_release(entry, versions)

        assert root == versions / "17.0.5+8"
        assert (root / "bin" / "java").is_file()
        assert (root / "lib" / "modules").is_file()
        assert not (root / "jdk-17.0.5+8").exists()
        assert fake.urls == [entry.download_url]
        # archive removed, no staging left behind
        assert [p.name for p in versions.iterdir()] == ["17.0.5+8"]


def test_install_release_flat_archive_and_progress():
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        fake = FakeDownload(build_tar_gz(base / "src.tar.gz", wrapper=None))
        seen = []

        with patch("jdk_resolver.installer.download_file", side_effect=fake):
            root = install_release(make_entry("21.0.2"), base / "versions", progress=lambda d, t: seen.append((d, t)))

        assert (root / "bin" / "java").is_file()
        assert len(seen) == 1


def test_install_release_keeps_archive_on_request():
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        fake = FakeDownload(build_tar_gz(base / "src.tar.gz"))
        entry = make_entry("17.0.5+8")

        with patch("jdk_resolver.installer.download_file", side_effect=fake):
            install_release(entry, base / "versions", keep_archive=True)

        assert (base / "versions" / entry.filename).is_file()


def test_install_release_replaces_existing():
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        fake = FakeDownload(build_tar_gz(base / "src.tar.gz"))
        stale = base / "versions" / "17.0.5+8"
        stale.mkdir(parents=True)
        (stale / "stale.txt").write_text("old")

        with patch("jdk_resolver.installer.download_file", side_effect=fake):
            root = install_release(make_entry("17.0.5+8"), base / "versions")

        assert not (root / "stale.txt").exists()
        assert (root / "bin" / "java").is_file()
        assert hidden_entries(base / "versions") == []


def test_install_release_encoded_separators_stay_in_versions_dir(tmp_path):
    """Test a URL with %2F-encoded "../" segments cannot place the download outside versions_dir."""
    fake = FakeDownload(build_tar_gz(tmp_path / "src.tar.gz"))
    versions = tmp_path / "a" / "versions"
    entry = make_entry("17.0.5+8", url="https://mirror.example/dl/..%2F..%2Fescaped.tar.gz")

    with patch("jdk_resolver.installer.download_file", side_effect=fake):
        root = install_release(entry, versions, keep_archive=True)

    assert fake.destinations == [versions / "escaped.tar.gz"]
    assert (versions / "escaped.tar.gz").is_file()
    assert not (tmp_path / "escaped.tar.gz").exists()
    assert (root / "bin" / "java").is_file()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_install_release_root_is_world_readable(tmp_path):
    fake = FakeDownload(build_tar_gz(tmp_path / "src.tar.gz", wrapper=None))

    with patch("jdk_resolver.installer.download_file", side_effect=fake):
        root = install_release(make_entry("17.0.5+8"), tmp_path / "versions")

    assert stat.S_IMODE(root.stat().st_mode) == 0o755


def test_install_release_windows_executable_from_entry_os():
    """Test the launcher name follows the release's OS, not the running host."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        archive = base / "src.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("zulu17-win_x64/bin/java.exe", b"MZ")
            zf.writestr("zulu17-win_x64/lib/modules", b"modules")
        entry = make_entry("17.0.8.1", os="windows", url="https://cdn.example.com/zulu17-win_x64.zip")

        with patch("jdk_resolver.installer.download_file", side_effect=FakeDownload(archive)):
            root = install_release(entry, base / "versions")

        assert (root / "bin" / "java.exe").is_file()


def test_install_release_invalid_layout_cleans_staging():
    """Test an archive without bin/java fails and leaves no partial installation."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        archive = base / "src.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            info = tarfile.TarInfo("docs/README")
            info.size = 2
            tf.addfile(info, io.BytesIO(b"hi"))
        versions = base / "versions"

        with patch("jdk_resolver.installer.download_file", side_effect=FakeDownload(archive)):
            with pytest.raises(LayoutError):
                install_release(make_entry("17.0.5+8"), versions)

        assert not (versions / "17.0.5+8").exists()
        assert hidden_entries(versions) == []


def test_install_release_corrupt_archive():
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        archive = base / "src.tar.gz"
        archive.write_bytes(b"not gzip")
        versions = base / "versions"

        with patch("jdk_resolver.installer.download_file", side_effect=FakeDownload(archive)):
            with pytest.raises(ExtractionError):
                install_release(make_entry("17.0.5+8"), versions)

        assert hidden_entries(versions) == []


def test_install_release_without_url(tmp_path):
    entry = make_entry("17.0.5").model_copy(update={"download_url": ""})

    with pytest.raises(NoMatchError, match="no download URL"):
        install_release(entry, tmp_path)


def test_install_release_unsupported_format(tmp_path):
    entry = make_entry("17.0.5", url="https://example.com/jdk-17.0.5.msi")

    with patch("jdk_resolver.installer.download_file") as mock_download:
        with pytest.raises(UnsupportedFormatError):
            install_release(entry, tmp_path)

    mock_download.assert_not_called()


def test_install_archive_from_kept_archive(tmp_path):
    """Test a kept archive can be extracted again without downloading."""
    fake = FakeDownload(build_tar_gz(tmp_path / "src.tar.gz"))
    versions = tmp_path / "versions"
    entry = make_entry("17.0.5+8")

    with patch("jdk_resolver.installer.download_file", side_effect=fake):
        install_release(entry, versions, keep_archive=True)
    shutil.rmtree(versions / "17.0.5+8")

    root = install_archive(versions / entry.filename, versions, "17.0.5+8", executable="java")

    assert root == versions / "17.0.5+8"
    assert (root / "bin" / "java").is_file()
    assert (root / "release").is_file()
    assert (versions / entry.filename).is_file()
    assert len(fake.urls) == 1


def test_install_archive_missing_archive(tmp_path):
    versions = tmp_path / "versions"

    with pytest.raises(ExtractionError):
        install_archive(tmp_path / "gone.tar.gz", versions, "17.0.5+8", executable="java")

    assert list(versions.iterdir()) == []


def test_install_archive_unsupported_format(tmp_path):
    archive = tmp_path / "jdk-17.0.5.msi"
    archive.write_bytes(b"msi")
    versions = tmp_path / "versions"

    with pytest.raises(UnsupportedFormatError):
        install_archive(archive, versions, "17.0.5", executable="java")

    assert list(versions.iterdir()) == []


def test_install_archive_failed_swap_keeps_previous_installation(tmp_path, monkeypatch):
    """Test the earlier installation is restored when the new one cannot be moved into place."""
    archive = build_tar_gz(tmp_path / "jdk.tar.gz")
    versions = tmp_path / "versions"
    previous = versions / "17.0.5+8"
    previous.mkdir(parents=True)
    (previous / "stale.txt").write_text("old")

    original_rename = Path.rename

    def failing_rename(self, target):
        if self.name.endswith("_extract"):
            raise OSError("device busy")
        return original_rename(self, target)

    monkeypatch.setattr(Path, "rename", failing_rename)

    with pytest.raises(LayoutError, match="Failed to move"):
        install_archive(archive, versions, "17.0.5+8", executable="java")

    assert (previous / "stale.txt").read_text() == "old"
    assert hidden_entries(versions) == []


def test_resolve_release():
    entries = [make_entry("21.0.1"), make_entry("21.0.2"), make_entry("20.0.1", lts=False)]

    assert resolve_release("21", entries, LINUX_X64).raw_version == "21.0.2"
    assert resolve_release("21.0.1", entries, LINUX_X64).raw_version == "21.0.1"

    with pytest.raises(ParseError):
        resolve_release("latest", entries, LINUX_X64)


def test_install_end_to_end():
    """Test install() fetches the named catalog and installs the best match."""
    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        fake = FakeDownload(build_tar_gz(base / "src.tar.gz", wrapper="jdk-21.0.2+13"))
        catalog = [make_entry("21.0.1+12"), make_entry("21.0.2+13"), make_entry("17.0.10+7")]

        with (
            patch("jdk_resolver.installer.fetch_catalog", return_value=catalog) as mock_fetch,
            patch("jdk_resolver.installer.download_file", side_effect=fake),
        ):
            root = install("21", base / "versions", provider="azul", host=LINUX_X64)

        assert root == base / "versions" / "21.0.2+13"
        assert (root / "bin" / "java").is_file()
        assert mock_fetch.call_args.args[0] == "azul"
        assert fake.urls == [catalog[1].download_url]


def test_install_invalid_request_skips_catalog(tmp_path):
    with patch("jdk_resolver.installer.fetch_catalog") as mock_fetch:
        with pytest.raises(ParseError):
            install("seventeen", tmp_path)

    mock_fetch.assert_not_called()
