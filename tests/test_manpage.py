import subprocess
import sys
from unittest import mock

import pytest

from rosenpass.manpage import FALLBACK_TEXT, ManpageError, generate_man, render_man


def _done(returncode, stdout=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=b"")


def test_render_man_missing_compiler(tmp_path):
    with pytest.raises(OSError):
        render_man(str(tmp_path / "no-such-compiler"), "page.1")


def test_render_man_failing_compiler():
    # The interpreter rejects -Tascii and exits with a failure status.
    with pytest.raises(ManpageError, match="returned an error"):
        render_man(sys.executable, "page.1")


@mock.patch("subprocess.run")
def test_render_man_returns_output(run):
    run.return_value = _done(0, b"ROSENPASS(1)\n")
    assert render_man("mandoc", "doc/rosenpass.1") == "ROSENPASS(1)\n"
    assert run.call_args[0][0] == ["mandoc", "-Tascii", "doc/rosenpass.1"]


@mock.patch("subprocess.run")
def test_render_man_rejects_invalid_utf8(run):
    run.return_value = _done(0, b"\xff\xfe")
    with pytest.raises(UnicodeDecodeError):
        render_man("mandoc", "doc/rosenpass.1")


@mock.patch("subprocess.run")
def test_generate_man_prefers_mandoc(run):
    run.return_value = _done(0, b"from mandoc")
    assert generate_man("page.1") == "from mandoc"
    assert run.call_args[0][0][0] == "mandoc"


@mock.patch("subprocess.run")
def test_generate_man_falls_back_to_groff(run):
    run.side_effect = [FileNotFoundError("mandoc"), _done(0, b"from groff")]
    assert generate_man("page.1") == "from groff"
    assert [c[0][0][0] for c in run.call_args_list] == ["mandoc", "groff"]


@mock.patch("subprocess.run")
def test_generate_man_failure_status_falls_back(run):
    run.side_effect = [_done(1), _done(0, b"groff text")]
    assert generate_man("page.1") == "groff text"


@mock.patch("subprocess.run")
def test_generate_man_gives_fallback_text(run):
    run.return_value = _done(2)
    assert generate_man("page.1") == "Cannot render manual page\n"
    assert FALLBACK_TEXT == generate_man("page.1")