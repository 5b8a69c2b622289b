# rootfs/services/info.py
from __future__ import annotations

import os
import stat
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class InfoRecord:
    """
    Snapshot of a file or directory at the time of the call.
    Nothing is cached; every info/list call builds fresh records.
    """
    pathname: str
    path: str
    basename: str
    extension: str
    size: int
    accessed_on: int
    modified_on: int
    created_on: int
    type: str  # "file" | "dir"
    mode: int  # read=4 + write=2 + execute=1
    inode: int
    perms: int
    owner: int
    group: int
    readable: bool
    writable: bool
    executable: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _extension(basename: str) -> str:
    if "." not in basename:
        return ""
    return basename.rsplit(".", 1)[1]


def build_info(pathname: str, abs_path: str, st: os.stat_result, basename: str | None = None) -> InfoRecord:
    """
    Build a record for `abs_path` from an already taken stat result.

    `pathname` is the normalized root-relative path. `basename` overrides the
    last segment (used for the root, whose relative path is empty).
    """
    if basename is None:
        basename = pathname.rsplit("/", 1)[-1]
    parent = pathname.rsplit("/", 1)[0] if "/" in pathname else ""

    readable = os.access(abs_path, os.R_OK)
    writable = os.access(abs_path, os.W_OK)
    executable = os.access(abs_path, os.X_OK)

    return InfoRecord(
        pathname=pathname,
        path=parent,
        basename=basename,
        extension=_extension(basename),
        size=st.st_size,
        accessed_on=int(st.st_atime),
        modified_on=int(st.st_mtime),
        created_on=int(st.st_ctime),
        type="dir" if stat.S_ISDIR(st.st_mode) else "file",
        mode=(4 if readable else 0) + (2 if writable else 0) + (1 if executable else 0),
        inode=st.st_ino,
        perms=st.st_mode,
        owner=st.st_uid,
        group=st.st_gid,
        readable=readable,
        writable=writable,
        executable=executable,
    )
