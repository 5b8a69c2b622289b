# rootfs/di.py
from dataclasses import dataclass
from typing import Optional

from rootfs.config import Settings
from rootfs.services.filesystem import FileSystem

@dataclass
class Container:
    settings: Settings
    fs: FileSystem

def build_container(settings: Optional[Settings] = None) -> Container:
    s = settings or Settings()
    if s.ROOTFS_CREATE_ROOT:
        s.ROOTFS_ROOT.mkdir(parents=True, exist_ok=True)

    fs = FileSystem(s.ROOTFS_ROOT)
    return Container(s, fs)
