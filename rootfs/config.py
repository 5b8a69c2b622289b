# rootfs/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Filesystem root; every path handed to rootfs resolves under it
    ROOTFS_ROOT: Path = Path("./.sandbox")
    ROOTFS_CREATE_ROOT: bool = True   # FileSystem itself refuses a missing root

    # MCP stdio host
    MCP_SERVER_NAME: str = "rootfs"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
