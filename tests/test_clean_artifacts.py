from __future__ import annotations

import logging
from pathlib import Path

import pytest

from clean.cleaner import CleanupResult, clean_artifacts, clean_project
from rules.config import SweepConfig


def _write_files(directory: Path, *names: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text(name, encoding="utf-8")


def _names(directory: Path) -> list[str]:
    return sorted(path.name for path in directory.iterdir())


def test_removes_package_and_checksum_keeps_other_files(tmp_path: Path) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "a.apk", "a.apk.sha1", "b.txt")

    result = clean_artifacts(out_dir)

    assert _names(out_dir) == ["b.txt"]
    assert [(a.name, a.kind) for a in result.removed] == [
        ("a.apk", "package"),
        ("a.apk.sha1", "checksum"),
    ]
    assert result.ok
    assert result.existed


def test_missing_directory_is_nothing_to_clean(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    result = clean_artifacts(missing)

    assert result == CleanupResult(directory=missing, existed=False)
    assert not missing.exists()


def test_empty_directory_stays_empty(tmp_path: Path) -> None:
    out_dir = tmp_path / "flutter-apk"
    out_dir.mkdir()

    result = clean_artifacts(out_dir)

    assert result.removed == ()
    assert list(out_dir.iterdir()) == []


def test_cleanup_is_idempotent(tmp_path: Path) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "app-debug.apk", "app-debug.apk.sha1", "notes.md")

    clean_artifacts(out_dir)
    after_first = _names(out_dir)
    second = clean_artifacts(out_dir)

    assert _names(out_dir) == after_first == ["notes.md"]
    assert second.removed == ()


def test_subdirectories_and_nested_artifacts_are_ignored(tmp_path: Path) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "top.apk")
    (out_dir / "looks-like.apk").mkdir()
    _write_files(out_dir / "nested", "inner.apk", "inner.apk.sha1")

    clean_artifacts(out_dir)

    assert _names(out_dir) == ["looks-like.apk", "nested"]
    assert _names(out_dir / "nested") == ["inner.apk", "inner.apk.sha1"]


def test_logs_one_line_per_deleted_file(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "app-release.apk", "app-release.apk.sha1", "keep.json")
    caplog.set_level(logging.INFO, logger="clean.cleaner")

    clean_artifacts(out_dir)

    assert caplog.messages == [
        "Deleting old APK: app-release.apk",
        "Deleting old SHA1: app-release.apk.sha1",
    ]


def test_failed_delete_is_reported_not_raised(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "locked.apk", "free.apk")
    original_unlink = Path.unlink

    def _unlink(self: Path, missing_ok: bool = False) -> None:
        if self.name == "locked.apk":
            msg = "file is busy"
            raise PermissionError(msg)
        original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(Path, "unlink", _unlink)
    caplog.set_level(logging.WARNING, logger="clean.cleaner")

    result = clean_artifacts(out_dir)

    assert not result.ok
    assert [a.name for a in result.removed] == ["free.apk"]
    assert [f.artifact.name for f in result.failed] == ["locked.apk"]
    assert "file is busy" in result.failed[0].reason
    assert any("Could not delete locked.apk" in m for m in caplog.messages)
    assert _names(out_dir) == ["locked.apk"]


def test_file_vanishing_before_delete_counts_as_removed(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "raced.apk")

    def _unlink(self: Path, missing_ok: bool = False) -> None:
        msg = f"No such file: {self}"
        raise FileNotFoundError(msg)

    monkeypatch.setattr(Path, "unlink", _unlink)

    result = clean_artifacts(out_dir)

    assert result.ok
    assert [a.name for a in result.removed] == ["raced.apk"]


def test_dry_run_deletes_nothing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "a.apk", "a.apk.sha1")
    caplog.set_level(logging.INFO, logger="clean.cleaner")

    result = clean_artifacts(out_dir, dry_run=True)

    assert _names(out_dir) == ["a.apk", "a.apk.sha1"]
    assert result.dry_run
    assert [a.name for a in result.removed] == ["a.apk", "a.apk.sha1"]
    assert caplog.messages[0] == "Would delete old APK: a.apk"


def test_keep_patterns_protect_matching_artifacts(tmp_path: Path) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "app-release.apk", "app-debug.apk", "app-debug.apk.sha1")
    config = SweepConfig(keep=["app-release.*"])

    clean_artifacts(out_dir, config=config)

    assert _names(out_dir) == ["app-release.apk"]


def test_custom_suffixes(tmp_path: Path) -> None:
    out_dir = tmp_path / "outputs"
    _write_files(out_dir, "app.aab", "app.aab.sha256", "app.apk")
    config = SweepConfig(
        package_suffixes=[".aab"],
        checksum_suffixes=[".aab.sha256"],
    )

    clean_artifacts(out_dir, config=config)

    assert _names(out_dir) == ["app.apk"]


def test_output_path_that_is_a_file_is_left_alone(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "flutter-apk"
    not_a_dir.write_text("oops", encoding="utf-8")

    result = clean_artifacts(not_a_dir)

    assert not result.existed
    assert not_a_dir.read_text(encoding="utf-8") == "oops"


def test_clean_project_uses_configured_output_dir(tmp_path: Path) -> None:
    root = tmp_path / "app"
    root.mkdir()
    (root / "apksweep.toml").write_text('output_dir = "dist"\n', encoding="utf-8")
    _write_files(root / "dist", "old.apk")
    _write_files(root / "build" / "app" / "outputs" / "flutter-apk", "other.apk")

    result = clean_project(root=root)

    assert result.directory == (root / "dist").resolve()
    assert not (root / "dist" / "old.apk").exists()
    assert (root / "build" / "app" / "outputs" / "flutter-apk" / "other.apk").exists()


def test_unlistable_directory_is_reported_not_raised(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    out_dir = tmp_path / "flutter-apk"
    _write_files(out_dir, "a.apk")

    def _iterdir(self: Path) -> None:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "iterdir", _iterdir)
    caplog.set_level(logging.WARNING, logger="clean.cleaner")

    result = clean_artifacts(out_dir)

    assert not result.ok
    assert result.existed
    assert result.removed == ()
    assert result.error is not None
    assert "Permission denied" in result.error
    assert any(m.startswith("Could not list") for m in caplog.messages)
    assert (out_dir / "a.apk").exists()


def test_output_path_that_is_a_file_logs_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    not_a_dir = tmp_path / "flutter-apk"
    not_a_dir.write_text("oops", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="clean.cleaner")

    clean_artifacts(not_a_dir)

    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert "is not a directory" in caplog.messages[0]
