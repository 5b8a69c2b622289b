# rootfs/services/filesystem.py
from __future__ import annotations

import logging
import os
import shutil
from typing import Dict, Iterator, List, Optional, Tuple, Union

from rootfs.errors import AlreadyExists, PathNotFound, RootNotFound
from rootfs.services.info import InfoRecord, build_info
from rootfs.services.pathguard import join_root, normalize

logger = logging.getLogger(__name__)

Contents = Union[bytes, bytearray, memoryview, str]
# file -> None, directory -> nested listing ({} when not expanded)
Listing = Dict[str, Optional["Listing"]]


def _as_bytes(contents: Contents) -> bytes:
    if isinstance(contents, str):
        return contents.encode("utf-8")
    if isinstance(contents, (bytes, bytearray, memoryview)):
        return bytes(contents)
    raise TypeError(f"contents must be str or bytes-like, not {type(contents).__name__}")


class FileSystem:
    """
    Files and directories confined to a root directory.

    Every path argument goes through `normalize` before it is joined onto the
    root, so no operation can reach outside of it.

    File operations raise PathNotFound / AlreadyExists. Structural directory
    operations (create_dir, remove_dir) report failure by returning False.
    """

    NAME = "rootfs"
    DESCRIPTION = "rootfs: a root-confined filesystem to manage files and directories."
    VERSION = "0.4.0"

    def __init__(self, root: Union[str, os.PathLike]):
        root = os.fspath(root) or "."
        self._root = root.rstrip("/") + "/"

        if not os.path.isdir(self._root):
            raise RootNotFound(self._root)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={self._root!r})"

    @property
    def root(self) -> str:
        return self._root

    def normalize(self, path: str) -> str:
        return normalize(path)

    def pathname(self, path: str) -> str:
        return join_root(self._root, path)

    def _abs(self, rel: str) -> str:
        return self._root + rel

    # ---------- Files ----------

    def _has(self, rel: str) -> bool:
        return os.path.isfile(self._abs(rel))

    def has(self, path: str) -> bool:
        return self._has(normalize(path))

    def read(self, path: str) -> bytes:
        rel = normalize(path)
        if not self._has(rel):
            raise PathNotFound(f"file: {rel}, not found")

        with open(self._abs(rel), "rb") as f:
            return f.read()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return self.read(path).decode(encoding)

    def write(self, path: str, contents: Contents, force: bool = False) -> int:
        rel = normalize(path)
        if not force and self._has(rel):
            raise AlreadyExists(f"file: {rel}, already exists")

        data = _as_bytes(contents)
        with open(self._abs(rel), "wb") as f:
            written = f.write(data)
        logger.debug("write %s (%d bytes)", rel, written)
        return written

    def write_text(self, path: str, content: str, force: bool = False, encoding: str = "utf-8") -> int:
        return self.write(path, content.encode(encoding), force=force)

    def append(self, path: str, contents: Contents, create: bool = False) -> int:
        rel = normalize(path)
        if not create and not self._has(rel):
            raise PathNotFound(f"file: {rel}, does not exist")

        data = _as_bytes(contents)
        with open(self._abs(rel), "ab") as f:
            written = f.write(data)
        logger.debug("append %s (%d bytes)", rel, written)
        return written

    def _check_transfer(self, src: str, dst: str, force: bool) -> None:
        if not self._has(src):
            raise PathNotFound(f"source: {src}, does not exist")
        if not force and self._has(dst):
            raise AlreadyExists(f"target: {dst}, already exists")

    def rename(self, from_path: str, to_path: str, force: bool = False) -> bool:
        src, dst = normalize(from_path), normalize(to_path)
        self._check_transfer(src, dst, force)

        os.replace(self._abs(src), self._abs(dst))
        logger.debug("rename %s -> %s", src, dst)
        return True

    def copy(self, from_path: str, to_path: str, force: bool = False) -> bool:
        src, dst = normalize(from_path), normalize(to_path)
        self._check_transfer(src, dst, force)

        shutil.copyfile(self._abs(src), self._abs(dst))
        logger.debug("copy %s -> %s", src, dst)
        return True

    def _unlink(self, rel: str) -> None:
        os.unlink(self._abs(rel))
        logger.debug("remove %s", rel)

    def remove(self, path: str) -> bool:
        rel = normalize(path)
        if not self._has(rel):
            raise PathNotFound(f"file: {rel}, does not exist")

        self._unlink(rel)
        return True

    # ---------- Directories ----------

    def _has_dir(self, rel: str) -> bool:
        return os.path.isdir(self._abs(rel))

    def has_dir(self, path: str) -> bool:
        return self._has_dir(normalize(path))

    is_dir = has_dir

    def _mkdir(self, rel: str) -> bool:
        if not rel or self._has_dir(rel):
            return False

        try:
            os.mkdir(self._abs(rel))
        except (OSError, ValueError) as e:
            logger.warning("create_dir %s failed: %s", rel, e)
            return False
        logger.debug("create_dir %s", rel)
        return True

    def create_dir(self, path: str, recursive: bool = False) -> bool:
        rel = normalize(path)
        if not recursive:
            return self._mkdir(rel)

        # walk from the first segment; the last mkdir decides the result
        created = False
        prefix = ""
        for segment in rel.split("/"):
            prefix = f"{prefix}/{segment}" if prefix else segment
            created = self._mkdir(prefix)
        return created

    def _rmdir(self, rel: str) -> bool:
        # the root itself is never removed
        if not rel or not self._has_dir(rel):
            return False
        try:
            if os.listdir(self._abs(rel)):
                return False
            os.rmdir(self._abs(rel))
        except (OSError, ValueError) as e:
            logger.warning("remove_dir %s failed: %s", rel, e)
            return False
        logger.debug("remove_dir %s", rel)
        return True

    def remove_dir(self, path: str, recursive: bool = False) -> bool:
        rel = normalize(path)
        if recursive and self._has_dir(rel):
            # no rollback: a failure leaves the directory partly emptied
            try:
                for child, entry in list(self._walk(rel)):
                    if entry.is_dir(follow_symlinks=False):
                        self._rmdir(child)
                    else:
                        self._unlink(child)
            except (OSError, ValueError) as e:
                logger.warning("remove_dir %s failed: %s", rel, e)
                return False
        return self._rmdir(rel)

    def _scan(self, rel: str) -> List[Tuple[str, os.DirEntry]]:
        with os.scandir(self._abs(rel)) as it:
            entries = sorted(it, key=lambda e: e.name)
        return [(f"{rel}/{e.name}" if rel else e.name, e) for e in entries]

    def _walk(self, rel: str) -> Iterator[Tuple[str, os.DirEntry]]:
        """Descendants first, then the directory holding them. Symlinks are not followed."""
        for child, entry in self._scan(rel):
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(child)
            yield child, entry

    def _require_dir(self, path: str) -> str:
        rel = normalize(path)
        if not self._has_dir(rel):
            raise PathNotFound(f"path: {rel}, not found")
        return rel

    def _entries(self, rel: str, recursive: bool) -> Listing:
        listing: Listing = {}
        for child, entry in self._scan(rel):
            if entry.is_dir(follow_symlinks=False):
                listing[entry.name] = self._entries(child, True) if recursive else {}
            else:
                listing[entry.name] = None
        return listing

    def list_entries(self, path: str, recursive: bool = False) -> Listing:
        """
        Names under `path`: files map to None, directories to a dict.

        Without `recursive` every directory maps to an empty dict; with it,
        to its own listing.
        """
        rel = self._require_dir(path)
        return self._entries(rel, recursive)

    def list_dir(self, path: str, recursive: bool = False) -> List[InfoRecord]:
        """
        Info records for the entries under `path`.

        Recursive listings are flat and child-first: every entry of a
        directory comes before the directory itself.
        """
        rel = self._require_dir(path)
        items = self._walk(rel) if recursive else self._scan(rel)
        return [build_info(child, entry.path, entry.stat(follow_symlinks=False)) for child, entry in items]

    # ---------- Info ----------

    def info(self, path: str) -> Optional[InfoRecord]:
        rel = normalize(path)
        if not (self._has(rel) or self._has_dir(rel)):
            return None

        abs_path = self._abs(rel)
        basename = None if rel else os.path.basename(os.path.abspath(self._root))
        return build_info(rel, abs_path, os.stat(abs_path), basename=basename)
