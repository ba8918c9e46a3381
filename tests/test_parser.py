import pytest

from tpol.parser import ChildInvocation, LineKind, classify, tokenize


def test_tokenize_has_no_quoting():
    assert tokenize("commit -m 'two words'") == ["commit", "-m", "'two", "words'"]


def test_tokenize_collapses_whitespace():
    assert tokenize("  log \t --oneline  ") == ["log", "--oneline"]


def test_shell_escape_runs_first_token():
    parsed = classify("!echo hi", "git")
    assert parsed.kind is LineKind.SHELL_ESCAPE
    assert parsed.invocation == ChildInvocation("echo", ("hi",))
    assert not parsed.records_history


def test_shell_escape_ignores_wrapped_command_name():
    parsed = classify("!git status", "git")
    assert parsed.invocation == ChildInvocation("git", ("status",))
    assert parsed.kind is LineKind.SHELL_ESCAPE


def test_escape_character_only_counts_at_line_start():
    parsed = classify(" !echo hi", "git")
    assert parsed.kind is LineKind.SUBCOMMAND
    assert parsed.invocation == ChildInvocation("git", ("!echo", "hi"))


@pytest.mark.parametrize("line", ["!", "!   ", "!\t"])
def test_bare_escape_runs_nothing(line):
    parsed = classify(line, "git")
    assert parsed.kind is LineKind.EMPTY
    assert parsed.invocation is None


@pytest.mark.parametrize("line", ["exit", "  exit", "exit  ", "\texit\n"])
def test_exit_with_surrounding_whitespace(line):
    assert classify(line, "git").kind is LineKind.EXIT


def test_exit_with_arguments_is_a_subcommand():
    parsed = classify("exit now", "git")
    assert parsed.kind is LineKind.SUBCOMMAND
    assert parsed.invocation.args == ("exit", "now")


@pytest.mark.parametrize("line", ["", "   ", "\t \t"])
def test_blank_lines_are_empty(line):
    parsed = classify(line, "git")
    assert parsed.kind is LineKind.EMPTY
    assert not parsed.records_history


def test_subcommand_appends_arguments():
    parsed = classify("log --oneline -3", "git")
    assert parsed.kind is LineKind.SUBCOMMAND
    assert parsed.invocation == ChildInvocation("git", ("log", "--oneline", "-3"))
    assert parsed.records_history
    assert parsed.line == "log --oneline -3"


def test_redundant_command_name_is_dropped():
    parsed = classify("mytool status", "mytool")
    assert parsed.invocation == ChildInvocation("mytool", ("status",))


def test_only_the_leading_command_name_is_dropped():
    parsed = classify("mytool mytool", "mytool")
    assert parsed.invocation.args == ("mytool",)


def test_command_name_alone_runs_without_arguments():
    parsed = classify("mytool", "mytool")
    assert parsed.kind is LineKind.SUBCOMMAND
    assert parsed.invocation == ChildInvocation("mytool", ())


def test_invocation_argv_and_str():
    invocation = ChildInvocation("git", ("commit", "-a"))
    assert invocation.argv == ["git", "commit", "-a"]
    assert str(invocation) == "git commit -a"
