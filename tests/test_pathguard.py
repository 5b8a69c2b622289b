import pytest

from rootfs.services.pathguard import join_root, normalize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        (".", ""),
        ("..", ""),
        ("/", ""),
        ("./", ""),
        ("../", ""),
        ("./../", ""),
        ("../../../", ""),
        ("../../../..", ""),
        ("abc", "abc"),
        ("abc/", "abc"),
        ("/abc", "abc"),
        ("/abc/", "abc"),
        ("abc/../../../", "abc"),
        ("/abc/../../../", "abc"),
        ("a//b///c", "a/b/c"),
        ("a/./b", "a/b"),
        ("../../etc/passwd", "etc/passwd"),
        ("/etc/../etc/passwd", "etc/etc/passwd"),
        ("dir/.hidden", "dir/.hidden"),
        ("..../x", "x"),
    ],
)
def test_normalize_table(raw, expected):
    assert normalize(raw) == expected


def test_canonical_paths_are_left_alone():
    for p in ["file.txt", "a/b/c", "a.b/c.d", "dir/.hidden", "x..y"]:
        assert normalize(p) == p


def test_normalize_is_idempotent():
    samples = [
        "", ".", "..", "/", "//", "./..", "../../../..", "abc/../../../",
        "a/./b//c/", "..../x", ".../y", "a/..", "a/.", "...", ".//.//..",
    ]
    for p in samples:
        once = normalize(p)
        assert normalize(once) == once


def test_normalized_paths_never_start_or_end_with_separator():
    for p in ["///a///", "/../a/./", "./../../b/", "a/b/"]:
        out = normalize(p)
        assert not out.startswith("/")
        assert not out.endswith("/")
        assert "//" not in out
        assert "../" not in out


def test_join_root():
    assert join_root("/srv/x/", "../../a//b/") == "/srv/x/a/b"
    assert join_root("/srv/x/", "..") == "/srv/x/"
