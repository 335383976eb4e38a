"""
Filesystem infrastructure for registrymirror.

The mirror service needs only four capabilities: create a directory tree,
write a file, remove a directory tree and stat a path. Two implementations:

- LocalFilesystem: the real disk, with atomic writes (temp file + rename)
- MemoryFilesystem: an in-memory tree used for dry runs and tests

Both raise the same OSError subclasses as the os module, in particular
FileNotFoundError for missing paths.
"""

import os
import posixpath
import shutil
import stat as stat_module
import tempfile
from pathlib import Path
from typing import Dict, Protocol, Set
import logging

logger = logging.getLogger(__name__)


class Filesystem(Protocol):
    """Capabilities the mirror service requires from a filesystem."""

    def makedirs(self, path: str) -> None: ...

    def write_file(self, path: str, content: str) -> None: ...

    def remove_tree(self, path: str) -> None: ...

    def stat(self, path: str) -> os.stat_result: ...


class LocalFilesystem:
    """
    Filesystem backed by the local disk.

    Example:
        fs = LocalFilesystem()
        fs.makedirs("/etc/containerd/certs.d/docker.io")
        fs.write_file("/etc/containerd/certs.d/docker.io/hosts.toml", content)
    """

    def __init__(self, file_mode: int = 0o644):
        """
        Initialize LocalFilesystem.

        Args:
            file_mode: Permission bits applied to written files
        """
        self.file_mode = file_mode

    def makedirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def write_file(self, path: str, content: str) -> None:
        """Write content atomically, replacing any existing file."""
        target = Path(path)
        fd, temp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp"
        )

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
            os.chmod(temp_path, self.file_mode)

            # Atomic rename
            os.replace(temp_path, target)
            logger.debug(f"Wrote {target}")

        except Exception:
            # Clean up temp file on error
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def remove_tree(self, path: str) -> None:
        shutil.rmtree(path)
        logger.debug(f"Removed {path}")

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)


class MemoryFilesystem:
    """
    In-memory filesystem with POSIX path semantics.

    Only tracks directories and file contents; stat results carry the mode
    and size and nothing else.
    """

    def __init__(self):
        self.files: Dict[str, str] = {}
        self.directories: Set[str] = {'/'}

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(posixpath.join('/', str(path)))

    def makedirs(self, path: str) -> None:
        path = self._normalize(path)
        if path in self.files:
            raise FileExistsError(f"File exists: '{path}'")
        while path not in self.directories:
            if path in self.files:
                raise NotADirectoryError(f"Not a directory: '{path}'")
            self.directories.add(path)
            path = posixpath.dirname(path)

    def write_file(self, path: str, content: str) -> None:
        path = self._normalize(path)
        if path in self.directories:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        if posixpath.dirname(path) not in self.directories:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        self.files[path] = content

    def read_file(self, path: str) -> str:
        path = self._normalize(path)
        if path not in self.files:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return self.files[path]

    def remove_tree(self, path: str) -> None:
        path = self._normalize(path)
        if path in self.files:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        if path not in self.directories:
            raise FileNotFoundError(f"No such file or directory: '{path}'")

        prefix = path.rstrip('/') + '/'
        self.directories = {d for d in self.directories if d != path and not d.startswith(prefix)}
        self.files = {f: c for f, c in self.files.items() if not f.startswith(prefix)}
        self.directories.add('/')

    def stat(self, path: str) -> os.stat_result:
        path = self._normalize(path)
        if path in self.directories:
            return _stat_result(stat_module.S_IFDIR | 0o755, 0)
        if path in self.files:
            return _stat_result(stat_module.S_IFREG | 0o644, len(self.files[path].encode()))
        raise FileNotFoundError(f"No such file or directory: '{path}'")

    def exists(self, path: str) -> bool:
        path = self._normalize(path)
        return path in self.directories or path in self.files


def _stat_result(mode: int, size: int) -> os.stat_result:
    return os.stat_result((mode, 0, 0, 1, 0, 0, size, 0, 0, 0))
