# rootfs_mcp/registry.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel

from rootfs.di import Container, build_container
from rootfs.logging import log_tool_call
from rootfs_mcp.tools.files import (
    FileToolHandlers,
    FsAppendIn,
    FsDirIn,
    FsListIn,
    FsPathIn,
    FsTransferIn,
    FsWriteIn,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], Any]


def _schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    return model.model_json_schema()


def build_tool_registry(container: Optional[Container] = None) -> Dict[str, ToolSpec]:
    """
    Build the registry once at startup.
    Payload generation, dispatch and FastMCP registration all read from it.
    """
    container = container or build_container()
    h = FileToolHandlers(container.fs)

    specs = [
        ToolSpec("fs_has", "Check whether a file exists under the root", FsPathIn, h.fs_has),
        ToolSpec("fs_read", "Read a UTF-8 text file under the root", FsPathIn, h.fs_read),
        ToolSpec(
            "fs_write",
            "Write a UTF-8 text file under the root; fails if it exists unless force is set",
            FsWriteIn,
            h.fs_write,
        ),
        ToolSpec(
            "fs_append",
            "Append UTF-8 text to a file; fails if it is missing unless create is set",
            FsAppendIn,
            h.fs_append,
        ),
        ToolSpec("fs_rename", "Rename a file under the root", FsTransferIn, h.fs_rename),
        ToolSpec("fs_copy", "Copy a file under the root", FsTransferIn, h.fs_copy),
        ToolSpec("fs_remove", "Remove a file under the root", FsPathIn, h.fs_remove),
        ToolSpec("fs_has_dir", "Check whether a directory exists under the root", FsPathIn, h.fs_has_dir),
        ToolSpec("fs_create_dir", "Create a directory (optionally with its parents)", FsDirIn, h.fs_create_dir),
        ToolSpec(
            "fs_remove_dir",
            "Remove an empty directory, or a directory and all its contents when recursive",
            FsDirIn,
            h.fs_remove_dir,
        ),
        ToolSpec("fs_list", "List info records for the entries of a directory", FsListIn, h.fs_list),
        ToolSpec("fs_ls", "List entry names of a directory as a (nested) mapping", FsListIn, h.fs_ls),
        ToolSpec("fs_info", "Describe a file or directory; null when it does not exist", FsPathIn, h.fs_info),
    ]
    return {spec.name: spec for spec in specs}


def list_tools_payload(registry: Dict[str, ToolSpec]) -> Dict[str, Any]:
    """
    Produce the body of an MCP `tools/list` result.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": _schema_from_model(spec.input_model),
        })
    return {"tools": tools}


def dispatch_tool_call(registry: Dict[str, ToolSpec], name: str, arguments: Dict[str, Any]) -> Any:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    """
    if name not in registry:
        raise KeyError(f"Tool not found: {name}")
    spec = registry[name]
    log_tool_call(logger, name, arguments)
    args_obj = spec.input_model(**arguments)
    return spec.handler(args_obj)


def register_into_fastmcp(mcp, registry: Dict[str, ToolSpec]) -> None:
    """
    Register all registry tools into a FastMCP stdio host.
    """
    for spec in registry.values():
        # Create a local closure so each handler binds to its spec
        def make_tool(spec: ToolSpec):
            def tool_handler(input: spec.input_model):
                log_tool_call(logger, spec.name, input.model_dump())
                return spec.handler(input)
            return tool_handler

        mcp.tool(name=spec.name, description=spec.description)(make_tool(spec))
