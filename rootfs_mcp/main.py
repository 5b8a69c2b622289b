# rootfs_mcp/main.py
import argparse
import json

from fastmcp import FastMCP

from rootfs.di import build_container
from rootfs.logging import configure_logging
from rootfs.services.filesystem import FileSystem
from rootfs_mcp.registry import build_tool_registry, list_tools_payload, register_into_fastmcp

def create_app() -> FastMCP:
    """
    Build DI container, create FastMCP host, and register the filesystem tools.
    Keep the server (protocol) separate from the FileSystem logic.
    """
    container = build_container()
    configure_logging(container.settings.LOG_LEVEL)

    mcp = FastMCP(container.settings.MCP_SERVER_NAME, version=FileSystem.VERSION)
    register_into_fastmcp(mcp, build_tool_registry(container))
    return mcp


def main(argv=None):
    parser = argparse.ArgumentParser(prog="rootfs-mcp", description=FileSystem.DESCRIPTION)
    parser.add_argument(
        "--list-tools", action="store_true", help="print the tools/list payload as JSON and exit"
    )
    args = parser.parse_args(argv)

    if args.list_tools:
        print(json.dumps(list_tools_payload(build_tool_registry()), indent=2))
        return

    app = create_app()
    # stdio transport: the client launches this process and speaks JSON-RPC on stdin/stdout
    app.run(transport="stdio")


if __name__ == "__main__":
    main()
