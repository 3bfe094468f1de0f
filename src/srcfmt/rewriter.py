import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from .errors import RewriteError

logger = logging.getLogger(__name__)


class FileRewriter:
    """Writes formatted content back to disk only when it changed.

    The new content goes to a temporary file in the target's directory, which
    then replaces the original with os.replace. The original stays intact until
    that rename, so an interrupted run never leaves a truncated file behind.
    """

    def rewrite(self, path: Path, new_bytes: bytes, current: Optional[bytes] = None) -> bool:
        # Write through symlinks so the link itself is preserved
        target = Path(os.path.realpath(path))
        try:
            if current is None:
                current = target.read_bytes()
            if current == new_bytes:
                return False
            mode = stat.S_IMODE(target.stat().st_mode)
            self._replace(target, new_bytes, mode)
        except OSError as e:
            raise RewriteError(e.strerror or str(e), path) from e

        logger.info("Rewrote %s", path)
        return True

    def _replace(self, target: Path, new_bytes: bytes, mode: int) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(new_bytes)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
