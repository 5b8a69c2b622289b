import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from rootfs.config import Settings
from rootfs.di import build_container
from rootfs.errors import AlreadyExists, PathNotFound
from rootfs_mcp.registry import build_tool_registry, dispatch_tool_call, list_tools_payload


@pytest.fixture
def registry(tmp_path: Path):
    container = build_container(Settings(ROOTFS_ROOT=tmp_path))
    return build_tool_registry(container)


def test_tools_list_payload(registry):
    payload = list_tools_payload(registry)
    names = {t["name"] for t in payload["tools"]}
    assert names == {
        "fs_has", "fs_read", "fs_write", "fs_append", "fs_rename", "fs_copy", "fs_remove",
        "fs_has_dir", "fs_create_dir", "fs_remove_dir", "fs_list", "fs_ls", "fs_info",
    }
    write = next(t for t in payload["tools"] if t["name"] == "fs_write")
    assert set(write["inputSchema"]["required"]) == {"path", "content"}


def test_dispatch_file_round_trip(registry, tmp_path: Path):
    assert dispatch_tool_call(registry, "fs_write", {"path": "../../a.txt", "content": "hi"}) == 2
    assert (tmp_path.parent / "a.txt").exists() is False
    assert (tmp_path / "a.txt").read_text() == "hi"

    assert dispatch_tool_call(registry, "fs_read", {"path": "a.txt"}) == "hi"
    assert dispatch_tool_call(registry, "fs_append", {"path": "a.txt", "content": "!"}) == 1
    assert dispatch_tool_call(registry, "fs_copy", {"source": "a.txt", "target": "b.txt"}) is True
    assert dispatch_tool_call(registry, "fs_rename", {"source": "b.txt", "target": "c.txt"}) is True
    assert dispatch_tool_call(registry, "fs_has", {"path": "c.txt"}) is True
    assert dispatch_tool_call(registry, "fs_remove", {"path": "c.txt"}) is True
    assert dispatch_tool_call(registry, "fs_has", {"path": "c.txt"}) is False


def test_dispatch_directories(registry):
    assert dispatch_tool_call(registry, "fs_create_dir", {"path": "x/y", "recursive": True}) is True
    assert dispatch_tool_call(registry, "fs_has_dir", {"path": "x/y"}) is True
    dispatch_tool_call(registry, "fs_write", {"path": "x/y/z.txt", "content": "z"})

    assert dispatch_tool_call(registry, "fs_ls", {"path": "", "recursive": True}) == {
        "x": {"y": {"z.txt": None}}
    }
    records = dispatch_tool_call(registry, "fs_list", {"path": "x/y"})
    assert [r["basename"] for r in records] == ["z.txt"]

    info = dispatch_tool_call(registry, "fs_info", {"path": "x"})
    assert info["type"] == "dir"
    assert dispatch_tool_call(registry, "fs_info", {"path": "missing"}) is None

    assert dispatch_tool_call(registry, "fs_remove_dir", {"path": "x"}) is False
    assert dispatch_tool_call(registry, "fs_remove_dir", {"path": "x", "recursive": True}) is True


def test_dispatch_errors(registry):
    with pytest.raises(KeyError):
        dispatch_tool_call(registry, "fs_nope", {})
    with pytest.raises(ValidationError):
        dispatch_tool_call(registry, "fs_write", {"path": "a.txt"})

    dispatch_tool_call(registry, "fs_write", {"path": "a.txt", "content": "1"})
    with pytest.raises(AlreadyExists):
        dispatch_tool_call(registry, "fs_write", {"path": "a.txt", "content": "2"})
    with pytest.raises(PathNotFound):
        dispatch_tool_call(registry, "fs_read", {"path": "b.txt"})


def test_main_lists_tools_as_json(monkeypatch, capsys, tmp_path: Path):
    from rootfs_mcp.main import main

    monkeypatch.setenv("ROOTFS_ROOT", str(tmp_path / "root"))
    main(["--list-tools"])

    payload = json.loads(capsys.readouterr().out)
    names = [t["name"] for t in payload["tools"]]
    assert "fs_write" in names and "fs_remove_dir" in names
    assert all("inputSchema" in t for t in payload["tools"])
