import os
from pathlib import Path
import tempfile

from src.platform.exception.exceptions import SnapshotWriteError


def write_atomic(path: str | Path, data: bytes) -> None:
    """
    Replace `path` with `data` in one step

    The bytes are written and fsynced to a sibling temp file which is then
    renamed over the target.

    Raises:
        SnapshotWriteError: on any filesystem error
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f'.{target.name}.', dir=target.parent)
        try:
            with os.fdopen(fd, 'wb') as tmp_file:
                tmp_file.write(data)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise SnapshotWriteError(f'Could not write {target}: {e}') from e
