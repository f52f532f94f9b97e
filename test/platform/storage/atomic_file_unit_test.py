from pathlib import Path

import pytest

from src.platform.exception.exceptions import SnapshotWriteError
from src.platform.storage import atomic_file
from src.platform.storage.atomic_file import write_atomic


class TestWriteAtomic:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / 'nested' / 'dir' / 'lot.json'

        write_atomic(target, b'{}')

        assert target.read_bytes() == b'{}'

    def test_replaces_existing_content(self, tmp_path: Path) -> None:
        target = tmp_path / 'lot.json'
        target.write_bytes(b'old')

        write_atomic(target, b'new')

        assert target.read_bytes() == b'new'
        assert [path.name for path in tmp_path.iterdir()] == ['lot.json']

    def test_failed_rename_keeps_old_file_and_cleans_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / 'lot.json'
        target.write_bytes(b'old')

        def failing_replace(src: str, dst: Path) -> None:
            raise OSError('disk full')

        monkeypatch.setattr(atomic_file.os, 'replace', failing_replace)

        with pytest.raises(SnapshotWriteError):
            write_atomic(target, b'new')

        assert target.read_bytes() == b'old'
        assert [path.name for path in tmp_path.iterdir()] == ['lot.json']
