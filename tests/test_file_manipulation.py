"""
Unit tests for the entry relocation service.
"""

import pytest
import tempfile
from pathlib import Path
import json

from folder_organizer.file_access.local_accessor import DirectoryEntry, EntryKind
from folder_organizer.file_access.manipulator import FileManipulator, FileOperation


def file_entry(path: Path) -> DirectoryEntry:
    return DirectoryEntry(path=path, kind=EntryKind.FILE)


def dir_entry(path: Path) -> DirectoryEntry:
    return DirectoryEntry(path=path, kind=EntryKind.DIRECTORY)


class TestFileManipulator:
    """Test FileManipulator functionality."""

    @pytest.fixture
    def base_dir(self):
        """Create a temporary directory with loose entries."""
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            (base / "notes.md").write_text("Test content")
            (base / "report.txt").write_text("loose report")
            project = base / "my-project"
            project.mkdir()
            (project / "main.py").write_text("print('hi')")
            yield base

    def test_initialization(self, base_dir):
        manipulator = FileManipulator(base_dir, dry_run=False)

        assert manipulator.base_directory == base_dir
        assert not manipulator.dry_run
        assert manipulator.operations_log == []

    def test_move_file(self, base_dir, capsys):
        manipulator = FileManipulator(base_dir)
        source = base_dir / "notes.md"

        assert manipulator.relocate(file_entry(source), "documents")

        target = base_dir / "documents" / "notes.md"
        assert not source.exists()
        assert target.read_text() == "Test content"
        assert capsys.readouterr().out == "[documents   ] notes.md\n"

    def test_move_directory(self, base_dir, capsys):
        manipulator = FileManipulator(base_dir)
        source = base_dir / "my-project"

        assert manipulator.relocate(dir_entry(source), "Folders")

        assert not source.exists()
        assert (base_dir / "Folders" / "my-project" / "main.py").exists()
        assert capsys.readouterr().out == "[Folders     ] (Directory) my-project\n"

    def test_long_category_is_not_truncated(self, base_dir, capsys):
        manipulator = FileManipulator(base_dir, dry_run=True)

        manipulator.relocate(file_entry(base_dir / "notes.md"), "presentations")

        assert capsys.readouterr().out == "[presentations] notes.md\n"

    def test_dry_run_mode(self, base_dir, capsys):
        manipulator = FileManipulator(base_dir, dry_run=True)
        source = base_dir / "notes.md"

        assert manipulator.relocate(file_entry(source), "documents")

        assert source.exists()
        assert not (base_dir / "documents").exists()
        assert capsys.readouterr().out == "[documents   ] notes.md\n"
        assert manipulator.operations_log[0].status == "planned"
        assert manipulator.operations_log[0].success

    def test_file_collision_is_skipped(self, base_dir, capsys):
        """An existing destination is never overwritten."""
        (base_dir / "Others").mkdir()
        existing = base_dir / "Others" / "report.txt"
        existing.write_text("original")
        source = base_dir / "report.txt"

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(file_entry(source), "Others")

        assert source.read_text() == "loose report"
        assert existing.read_text() == "original"
        assert (
            capsys.readouterr().out == "[SKIP] report.txt (already exists in Others)\n"
        )
        assert manipulator.operations_log[0].status == "skipped"

    def test_directory_collision_is_skipped(self, base_dir, capsys):
        (base_dir / "Folders" / "my-project").mkdir(parents=True)

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(dir_entry(base_dir / "my-project"), "Folders")

        assert (base_dir / "my-project" / "main.py").exists()
        assert (
            capsys.readouterr().out
            == "[SKIP DIR] my-project (already exists in Folders)\n"
        )

    def test_container_is_not_moved_into_itself(self, base_dir, capsys):
        container = base_dir / "Folders"
        container.mkdir()

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(dir_entry(container), "Folders")

        assert container.is_dir()
        assert capsys.readouterr().out == ""
        assert manipulator.operations_log == []

    def test_rename_failure_is_reported(self, base_dir, capsys, mocker):
        mocker.patch.object(
            Path, "rename", side_effect=OSError("Invalid cross-device link")
        )
        source = base_dir / "notes.md"

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(file_entry(source), "documents")

        captured = capsys.readouterr()
        assert source.exists()
        assert captured.out == "[documents   ] notes.md\n"
        assert "Error moving notes.md: Invalid cross-device link" in captured.err
        assert manipulator.operations_log[0].status == "failed"
        assert manipulator.operations_log[0].error == "Invalid cross-device link"

    def test_directory_rename_failure_is_reported(self, base_dir, capsys, mocker):
        mocker.patch.object(Path, "rename", side_effect=PermissionError("denied"))

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(dir_entry(base_dir / "my-project"), "Folders")

        assert "Error moving directory my-project: denied" in capsys.readouterr().err

    def test_container_creation_failure(self, base_dir, capsys, mocker):
        mocker.patch.object(Path, "mkdir", side_effect=PermissionError("read-only"))
        source = base_dir / "notes.md"

        manipulator = FileManipulator(base_dir)
        assert not manipulator.relocate(file_entry(source), "documents")

        captured = capsys.readouterr()
        assert source.exists()
        assert captured.out == ""
        assert "Error creating dir: read-only" in captured.err
        assert manipulator.operations_log[0].status == "failed"

    def test_dry_run_never_creates_containers(self, base_dir, mocker):
        mkdir = mocker.patch.object(Path, "mkdir")

        manipulator = FileManipulator(base_dir, dry_run=True)
        manipulator.relocate(file_entry(base_dir / "notes.md"), "documents")

        mkdir.assert_not_called()

    def test_operation_summary(self, base_dir):
        (base_dir / "Others").mkdir()
        (base_dir / "Others" / "report.txt").write_text("original")

        manipulator = FileManipulator(base_dir)
        manipulator.relocate(file_entry(base_dir / "notes.md"), "documents")
        manipulator.relocate(file_entry(base_dir / "report.txt"), "Others")
        manipulator.relocate(dir_entry(base_dir / "my-project"), "Folders")

        summary = manipulator.get_operation_summary()
        assert summary["total_operations"] == 3
        assert summary["successful"] == 2
        assert summary["skipped"] == 1
        assert summary["failed"] == 0
        assert summary["operations_by_category"] == {"documents": 1, "Folders": 1}
        assert summary["dry_run"] is False

    def test_export_operations_log(self, base_dir):
        manipulator = FileManipulator(base_dir)
        manipulator.relocate(file_entry(base_dir / "notes.md"), "documents")

        with tempfile.TemporaryDirectory() as report_dir:
            report_path = Path(report_dir) / "reports" / "run.json"
            manipulator.export_operations_log(report_path)

            with open(report_path, "r") as f:
                exported = json.load(f)

        assert exported["base_directory"] == str(base_dir)
        assert exported["summary"]["successful"] == 1
        assert len(exported["operations"]) == 1
        operation = exported["operations"][0]
        assert operation["entry_kind"] == "file"
        assert operation["status"] == "moved"
        assert operation["target_path"] == str(base_dir / "documents" / "notes.md")


class TestFileOperation:
    """Test FileOperation status helpers."""

    @pytest.mark.parametrize(
        "status,success",
        [("moved", True), ("planned", True), ("skipped", False), ("failed", False)],
    )
    def test_success(self, status, success):
        operation = FileOperation(
            entry_kind="file",
            source_path="/a/b.txt",
            target_path="/a/documents/b.txt",
            category="documents",
            timestamp="2024-01-01T00:00:00",
            status=status,
        )

        assert operation.success is success
