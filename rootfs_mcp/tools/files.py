# rootfs_mcp/tools/files.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from rootfs.services.filesystem import FileSystem


class FsPathIn(BaseModel):
    path: str = Field(..., description="Path relative to the filesystem root")


class FsWriteIn(FsPathIn):
    content: str = Field(..., description="UTF-8 text content to write")
    force: bool = Field(False, description="Overwrite the file if it already exists")


class FsAppendIn(FsPathIn):
    content: str = Field(..., description="UTF-8 text content to append")
    create: bool = Field(False, description="Create the file if it does not exist")


class FsTransferIn(BaseModel):
    source: str = Field(..., description="Existing file, relative to the root")
    target: str = Field(..., description="Destination file, relative to the root")
    force: bool = Field(False, description="Replace the target if it already exists")


class FsDirIn(FsPathIn):
    recursive: bool = Field(
        False, description="Create missing parents / remove all contents first"
    )


class FsListIn(BaseModel):
    path: str = Field("", description="Directory relative to the root ('' is the root)")
    recursive: bool = Field(False, description="Descend into subdirectories")


class FileToolHandlers:
    """
    Named handlers for the filesystem tools (no lambdas).
    Each takes its validated input model and calls straight into FileSystem.
    """
    def __init__(self, fs: FileSystem):
        self.fs = fs

    def fs_has(self, args: FsPathIn) -> bool:
        return self.fs.has(args.path)

    def fs_read(self, args: FsPathIn) -> str:
        return self.fs.read_text(args.path)

    def fs_write(self, args: FsWriteIn) -> int:
        return self.fs.write_text(args.path, args.content, force=args.force)

    def fs_append(self, args: FsAppendIn) -> int:
        return self.fs.append(args.path, args.content, create=args.create)

    def fs_rename(self, args: FsTransferIn) -> bool:
        return self.fs.rename(args.source, args.target, force=args.force)

    def fs_copy(self, args: FsTransferIn) -> bool:
        return self.fs.copy(args.source, args.target, force=args.force)

    def fs_remove(self, args: FsPathIn) -> bool:
        return self.fs.remove(args.path)

    def fs_has_dir(self, args: FsPathIn) -> bool:
        return self.fs.has_dir(args.path)

    def fs_create_dir(self, args: FsDirIn) -> bool:
        return self.fs.create_dir(args.path, recursive=args.recursive)

    def fs_remove_dir(self, args: FsDirIn) -> bool:
        return self.fs.remove_dir(args.path, recursive=args.recursive)

    def fs_list(self, args: FsListIn) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.fs.list_dir(args.path, recursive=args.recursive)]

    def fs_ls(self, args: FsListIn) -> Dict[str, Any]:
        return self.fs.list_entries(args.path, recursive=args.recursive)

    def fs_info(self, args: FsPathIn) -> Optional[Dict[str, Any]]:
        record = self.fs.info(args.path)
        return record.to_dict() if record is not None else None
