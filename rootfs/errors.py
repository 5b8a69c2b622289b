# rootfs/errors.py
class FileSystemError(OSError):
    """Base class for errors raised by rootfs."""


class RootNotFound(FileSystemError, NotADirectoryError):
    def __init__(self, root: str):
        super().__init__(f"root dir: {root}, does not exist")
        self.root = root


class PathNotFound(FileSystemError, FileNotFoundError):
    pass


class AlreadyExists(FileSystemError, FileExistsError):
    pass
