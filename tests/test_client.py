import io
from unittest import mock

import pytest

from dnfwrap import client
from dnfwrap.client import Dnf, Options, Package, new, parse_deplist, process_options
from dnfwrap.errors import ArgumentError, BinaryNotFoundError, CommandError

from conftest import FakeRunner

DEPLIST = """package: foo-1.0-1.fc39.x86_64
  dependency: libc.so.6()(64bit)
   provider: foo-1.0
   provider: bar-2.0

package: foo-1.1-1.fc39.x86_64
   provider: baz-3.0
"""


def make_client(runner, path="/usr/bin/dnf"):
    return Dnf(path, runner=runner)


# -----
# Option flags
# -----
def test_process_options_all_flags_in_order():
    opt = Options(dry_run=True, verbose=True, not_assume_yes=False, destdir="/x")
    assert process_options(opt) == ["--setopt", "tsflags=test", "--verbose", "--assumeyes", "--destdir", "/x"]


def test_process_options_empty_when_not_assuming_yes():
    assert process_options(Options(not_assume_yes=True)) == []


def test_process_options_defaults_to_assumeyes():
    assert process_options(None) == ["--assumeyes"]
    assert process_options(Options()) == ["--assumeyes"]


# -----
# Dependency parsing
# -----
def test_parse_deplist_stops_at_blank_line():
    text = "provider: foo-1.0\nprovider: bar-2.0\n\nprovider: baz-3.0\n"
    assert parse_deplist(text) == [Package(name="foo-1.0"), Package(name="bar-2.0")]


def test_parse_deplist_ignores_line_without_separator():
    assert parse_deplist("provider:onlyonepart\nprovider: ok-1\n") == [Package(name="ok-1")]


def test_parse_deplist_ignores_other_lines_and_indentation():
    assert parse_deplist(DEPLIST) == [Package(name="foo-1.0"), Package(name="bar-2.0")]


def test_parse_deplist_empty_output():
    assert parse_deplist("") == []


def test_package_reserved_fields_are_empty():
    pkg = parse_deplist("provider: foo-1.0")[0]
    assert pkg.version == ""
    assert pkg.path == ""


# -----
# Construction
# -----
def test_explicit_path_skips_detection():
    runner = FakeRunner(path=None)
    dnf = Dnf("/does/not/exist/dnf", runner=runner)
    assert dnf.binary_path == "/does/not/exist/dnf"
    assert runner.lookups == []


def test_empty_path_detects_binary(runner):
    dnf = Dnf("", runner=runner)
    assert dnf.binary_path == "/usr/bin/dnf"
    assert runner.lookups == ["dnf"]


def test_detection_failure_raises():
    with pytest.raises(BinaryNotFoundError):
        Dnf("", runner=FakeRunner(path=None))


def test_new_returns_none_when_detection_fails():
    assert new("", runner=FakeRunner(path=None)) is None


def test_new_with_explicit_path(runner):
    dnf = new("/opt/dnf", runner=runner)
    assert dnf.binary_path == "/opt/dnf"


# -----
# Operations
# -----
@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
@pytest.mark.parametrize("operation", ["install", "remove", "search", "depends"])
def test_blank_package_name_is_rejected_before_running(runner, operation, name):
    dnf = make_client(runner)
    with pytest.raises(ArgumentError) as exc:
        getattr(dnf, operation)(name, Options())
    assert "packageName was not specified." in str(exc.value)
    assert runner.calls == []


def test_install_arguments(runner):
    make_client(runner).install("vim", Options(verbose=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "install", "vim", "--verbose", "--assumeyes"]


@pytest.mark.parametrize("name", ["", "  "])
def test_update_without_name_updates_everything(runner, name):
    make_client(runner).update(name, Options(not_assume_yes=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "update"]


def test_update_with_name(runner):
    make_client(runner).update("bash", Options(not_assume_yes=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "update", "bash"]


def test_remove_arguments(runner):
    make_client(runner).remove("vim", Options(dry_run=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "remove", "vim", "--setopt", "tsflags=test", "--assumeyes"]


def test_search_includes_operation_and_term(runner):
    # The search term used to be validated but never passed to dnf.
    make_client(runner).search("vim", Options(not_assume_yes=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "search", "vim"]


def test_list_arguments(runner):
    make_client(runner).list(Options(destdir="/tmp/root"))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "list", "installed", "--assumeyes", "--destdir", "/tmp/root"]


def test_operations_without_parser_return_none():
    runner = FakeRunner(stdout="provider: foo-1.0\n")
    assert make_client(runner).install("foo") is None


def test_depends_parses_output():
    runner = FakeRunner(stdout=DEPLIST)
    result = make_client(runner).depends("foo", Options(not_assume_yes=True))
    assert runner.calls[0][0] == ["/usr/bin/dnf", "repoquery", "--deplist", "foo"]
    assert [p.name for p in result] == ["foo-1.0", "bar-2.0"]


def test_output_sink_is_passed_to_runner(runner):
    sink = io.StringIO()
    make_client(runner).list(Options(output=sink))
    assert runner.calls[0][1] is sink


def test_command_error_aborts_before_parsing():
    runner = mock.Mock()
    runner.run.side_effect = CommandError("dnf exited with status 1", returncode=1)
    with mock.patch.object(client, "parse_deplist") as parser:
        with pytest.raises(CommandError):
            Dnf("/usr/bin/dnf", runner=runner).depends("foo")
        parser.assert_not_called()
