from __future__ import annotations

"""
Unit tests for the Rotating File Manager.

Exercises the manager directly (no worker thread) to verify:
1. File selection, reuse of partial files and size-based rotation.
2. Size bookkeeping and flush-before-return.
3. Failure isolation: I/O errors, folder creation errors, unexpected errors.
"""

import logging
from pathlib import Path

import pytest

from prettylogger.core.disk import rotation
from prettylogger.core.disk.rotation import RotatingFileManager
from prettylogger.domain.errors import LogFolderError
from prettylogger.domain.models import LogRecord, Priority


def record(message: str) -> LogRecord:
    return LogRecord(Priority.DEBUG, None, message)


@pytest.fixture
def manager(tmp_path: Path):
    mgr = RotatingFileManager(str(tmp_path / "logs"), max_file_size=100)
    yield mgr
    mgr.close()


# -----------------------------------------------------------------------------
# Selection and rotation
# -----------------------------------------------------------------------------

def test_first_write_creates_folder_and_first_file(manager, tmp_path):
    manager.write("hello\n")

    target = tmp_path / "logs" / "logs_0.csv"
    assert target.read_text(encoding="utf-8") == "hello\n"
    assert manager.current_path == str(target)
    assert manager.current_size == 6


def test_size_counter_tracks_encoded_bytes(manager):
    manager.write("é\n")

    assert manager.current_size == 3


def test_write_is_flushed_before_returning(manager, tmp_path):
    """Data is on disk while the handle is still open."""
    manager.write("a" * 10)

    assert (tmp_path / "logs" / "logs_0.csv").stat().st_size == 10
    assert manager.current_path is not None


def test_consecutive_writes_reuse_the_open_handle(manager):
    first = manager.select_writer(10)
    manager.write("x" * 10)

    assert manager.select_writer(10) is first


def test_rotation_before_exceeding_ceiling(manager, tmp_path):
    """A 20-byte write on a 90-byte file goes to a new file; the old one stays at 90."""
    manager.write("a" * 90)
    manager.write("b" * 20)

    folder = tmp_path / "logs"
    assert (folder / "logs_0.csv").stat().st_size == 90
    assert (folder / "logs_1.csv").read_text(encoding="utf-8") == "b" * 20
    assert manager.current_path == str(folder / "logs_1.csv")
    assert manager.current_size == 20


def test_write_exactly_reaching_ceiling_does_not_rotate(manager, tmp_path):
    manager.write("a" * 90)
    manager.write("b" * 10)

    assert (tmp_path / "logs" / "logs_0.csv").stat().st_size == 100
    assert not (tmp_path / "logs" / "logs_1.csv").exists()


def test_partial_file_from_previous_run_is_reused(tmp_path):
    folder = tmp_path / "logs"
    folder.mkdir()
    (folder / "logs_0.csv").write_bytes(b"f" * 100)
    (folder / "logs_1.csv").write_bytes(b"h" * 50)

    mgr = RotatingFileManager(str(folder), max_file_size=100)
    try:
        mgr.write("x" * 10)
    finally:
        mgr.close()

    assert (folder / "logs_1.csv").stat().st_size == 60
    assert not (folder / "logs_2.csv").exists()


def test_existing_file_too_full_for_payload_is_skipped(tmp_path):
    folder = tmp_path / "logs"
    folder.mkdir()
    (folder / "logs_0.csv").write_bytes(b"a" * 90)

    mgr = RotatingFileManager(str(folder), max_file_size=100)
    try:
        mgr.write("b" * 20)
    finally:
        mgr.close()

    assert (folder / "logs_0.csv").stat().st_size == 90
    assert (folder / "logs_1.csv").stat().st_size == 20


def test_full_existing_file_starts_next_suffix(tmp_path):
    folder = tmp_path / "logs"
    folder.mkdir()
    (folder / "logs_0.csv").write_bytes(b"a" * 100)

    mgr = RotatingFileManager(str(folder), max_file_size=100)
    try:
        mgr.write("b")
    finally:
        mgr.close()

    assert (folder / "logs_1.csv").read_bytes() == b"b"


def test_oversized_payload_is_written_whole(manager, tmp_path):
    """A payload larger than the ceiling still lands in a single file."""
    manager.write("z" * 150)
    manager.write("y" * 10)

    folder = tmp_path / "logs"
    assert (folder / "logs_0.csv").stat().st_size == 150
    assert (folder / "logs_1.csv").stat().st_size == 10


def test_scan_stops_at_first_gap(tmp_path):
    folder = tmp_path / "logs"
    folder.mkdir()
    (folder / "logs_0.csv").write_bytes(b"a" * 10)
    (folder / "logs_2.csv").write_bytes(b"c" * 10)

    mgr = RotatingFileManager(str(folder), max_file_size=100)
    try:
        mgr.write("b")
    finally:
        mgr.close()

    assert (folder / "logs_0.csv").read_bytes() == b"a" * 10 + b"b"


def test_custom_prefix(tmp_path):
    mgr = RotatingFileManager(str(tmp_path), max_file_size=100, file_prefix="audit")
    try:
        mgr.write("x")
    finally:
        mgr.close()

    assert (tmp_path / "audit_0.csv").exists()


def test_close_resets_state(manager):
    manager.write("x")
    manager.close()

    assert manager.current_path is None
    assert manager.current_size == 0


# -----------------------------------------------------------------------------
# Failure isolation
# -----------------------------------------------------------------------------

def test_open_failure_drops_record_and_retries(manager, monkeypatch, caplog, tmp_path):
    def refuse(*args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(rotation, "open", refuse, raising=False)
    with caplog.at_level(logging.WARNING, logger="prettylogger"):
        manager.handle(record("lost\n"))

    assert manager.current_path is None
    assert any("Dropped log record" in r.getMessage() for r in caplog.records)

    monkeypatch.undo()
    manager.handle(record("kept\n"))

    assert (tmp_path / "logs" / "logs_0.csv").read_text(encoding="utf-8") == "kept\n"


def test_write_failure_closes_handle_and_resets(manager, caplog, tmp_path):
    manager.handle(record("first\n"))

    class BrokenHandle:
        closed = False

        def write(self, data):
            raise OSError("disk full")

        def flush(self):
            pass

        def close(self):
            self.closed = True

    manager._file.close()
    broken = BrokenHandle()
    manager._file = broken

    with caplog.at_level(logging.WARNING, logger="prettylogger"):
        manager.handle(record("lost\n"))

    assert broken.closed is True
    assert manager.current_path is None
    assert manager.current_size == 0

    manager.handle(record("third\n"))
    assert (tmp_path / "logs" / "logs_0.csv").read_text(encoding="utf-8") == "first\nthird\n"


def test_folder_creation_failure_is_reported_once(tmp_path, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file in the way", encoding="utf-8")
    mgr = RotatingFileManager(str(blocker / "logs"), max_file_size=100)

    with caplog.at_level(logging.ERROR, logger="prettylogger"):
        mgr.handle(record("a"))
        mgr.handle(record("b"))

    folder_errors = [r for r in caplog.records if "Unable to create log folder" in r.getMessage()]
    assert len(folder_errors) == 1
    assert mgr.current_path is None


def test_folder_error_is_reported_again_after_recovery(tmp_path, caplog):
    blocker = tmp_path / "blocked"
    blocker.write_text("x", encoding="utf-8")
    mgr = RotatingFileManager(str(blocker / "logs"), max_file_size=100)

    with caplog.at_level(logging.ERROR, logger="prettylogger"):
        mgr.handle(record("a"))
        blocker.unlink()
        mgr.handle(record("b"))
        mgr.close()
        logs_dir = blocker / "logs"
        (logs_dir / "logs_0.csv").unlink()
        logs_dir.rmdir()
        blocker.rmdir()
        blocker.write_text("x", encoding="utf-8")
        mgr.handle(record("c"))

    folder_errors = [r for r in caplog.records if "Unable to create log folder" in r.getMessage()]
    assert len(folder_errors) == 2


def test_select_writer_raises_folder_error(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("x", encoding="utf-8")
    mgr = RotatingFileManager(str(blocker / "logs"), max_file_size=100)

    with pytest.raises(LogFolderError) as excinfo:
        mgr.select_writer(1)

    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.folder == str(blocker / "logs")


def test_unexpected_failure_is_reported_and_contained(manager, monkeypatch, caplog):
    def explode(content):
        raise RuntimeError("bug")

    monkeypatch.setattr(manager, "write", explode)

    with caplog.at_level(logging.ERROR, logger="prettylogger"):
        manager.handle(record("x"))

    errors = [r for r in caplog.records if "Unexpected failure" in r.getMessage()]
    assert len(errors) == 1
    assert errors[0].exc_info is not None
