# rootfs/services/pathguard.py
"""
Textual path normalization.

Traversal tokens are erased, not resolved: `..` can never climb above the
root, and it cannot be used to navigate upwards inside it either.
"""
import re

_SEP_RUN = re.compile(r"//+")


def _normalize_once(path: str) -> str:
    path = path.replace("../", "/")
    path = path.replace("./", "/")
    path = _SEP_RUN.sub("/", path)
    path = path.lstrip("/").rstrip("/")
    if path in (".", ".."):
        return ""
    return path


def normalize(path: str) -> str:
    """
    Reduce any string to a root-relative path ("" is the root itself).

    >>> normalize("/abc/../../../")
    'abc'
    >>> normalize("../../../..")
    ''
    """
    # a changed pass is always shorter, so this terminates
    while True:
        out = _normalize_once(path)
        if out == path:
            return out
        path = out


def join_root(root: str, path: str) -> str:
    # root always carries its trailing separator
    return root + normalize(path)
