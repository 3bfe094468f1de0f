import os
import stat

import pytest
from srcfmt.errors import RewriteError
from srcfmt.rewriter import FileRewriter


def _leftovers(directory):
    return [p.name for p in directory.iterdir() if p.name.endswith(".tmp")]


def test_identical_content_is_not_written(tmp_path, monkeypatch):
    target = tmp_path / "A.java"
    target.write_bytes(b"class A {}\n")

    def fail_replace(*args):
        raise AssertionError("os.replace must not be called")

    monkeypatch.setattr(os, "replace", fail_replace)

    assert FileRewriter().rewrite(target, b"class A {}\n") is False
    assert FileRewriter().rewrite(target, b"class A {}\n", current=b"class A {}\n") is False


def test_changed_content_replaces_file(tmp_path):
    target = tmp_path / "A.java"
    target.write_bytes(b"class A{}")

    assert FileRewriter().rewrite(target, b"class A {}\n") is True
    assert target.read_bytes() == b"class A {}\n"
    assert _leftovers(tmp_path) == []


def test_second_rewrite_is_a_no_op(tmp_path):
    target = tmp_path / "A.java"
    target.write_bytes(b"old")
    rewriter = FileRewriter()

    assert rewriter.rewrite(target, b"new") is True
    assert rewriter.rewrite(target, b"new") is False


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_permission_bits_are_preserved(tmp_path):
    target = tmp_path / "run.java"
    target.write_bytes(b"old")
    target.chmod(0o754)

    FileRewriter().rewrite(target, b"new")

    assert stat.S_IMODE(target.stat().st_mode) == 0o754


def test_failed_replace_leaves_original_intact(tmp_path, monkeypatch):
    target = tmp_path / "A.java"
    target.write_bytes(b"original content")

    def broken_replace(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(RewriteError) as exc_info:
        FileRewriter().rewrite(target, b"formatted")

    assert exc_info.value.path == target
    assert "No space left on device" in exc_info.value.message
    assert target.read_bytes() == b"original content"
    assert _leftovers(tmp_path) == []


def test_interrupt_between_write_and_rename(tmp_path, monkeypatch):
    target = tmp_path / "A.java"
    target.write_bytes(b"original content")

    def interrupted(src, dst):
        raise KeyboardInterrupt

    monkeypatch.setattr(os, "replace", interrupted)

    with pytest.raises(KeyboardInterrupt):
        FileRewriter().rewrite(target, b"formatted")

    assert target.read_bytes() == b"original content"
    assert _leftovers(tmp_path) == []


def test_missing_file_raises_rewrite_error(tmp_path):
    with pytest.raises(RewriteError):
        FileRewriter().rewrite(tmp_path / "gone.java", b"x")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_is_preserved(tmp_path):
    real = tmp_path / "Real.java"
    real.write_bytes(b"old")
    link = tmp_path / "Link.java"
    link.symlink_to(real)

    assert FileRewriter().rewrite(link, b"new") is True

    assert link.is_symlink()
    assert real.read_bytes() == b"new"
