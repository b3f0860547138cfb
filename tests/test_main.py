import io

from loxvm.main import main, repl, run_file
from loxvm.vm import VM


def _vm():
    return VM(out=io.StringIO(), err=io.StringIO())


def test_repl_interprets_each_line():
    vm = _vm()
    repl(vm, io.StringIO("1 + 2\n!true\n"))
    assert vm.out.getvalue() == "> 3\n> false\n> \n"


def test_repl_keeps_going_after_errors():
    vm = _vm()
    repl(vm, io.StringIO("1 +\n-nil\nnil\n"))
    assert vm.out.getvalue() == "> > > nil\n> \n"
    assert "Expect expression." in vm.err.getvalue()
    assert "Operand must be a number." in vm.err.getvalue()


def test_run_file_ok(tmp_path):
    path = tmp_path / "ok.lox"
    path.write_text("true")
    vm = _vm()
    assert run_file(vm, str(path)) == 0
    assert vm.out.getvalue() == "true\n"


def test_run_file_compile_error(tmp_path):
    path = tmp_path / "bad.lox"
    path.write_text("(1")
    assert run_file(_vm(), str(path)) == 65


def test_run_file_runtime_error(tmp_path):
    path = tmp_path / "bad.lox"
    path.write_text("-nil")
    assert run_file(_vm(), str(path)) == 70


def test_run_file_missing(tmp_path):
    path = tmp_path / "missing.lox"
    vm = _vm()
    assert run_file(vm, str(path)) == 74
    assert vm.err.getvalue() == f'Could not open file "{path}".\n'


def test_main_usage(capsys):
    assert main(["a", "b"]) == 64
    assert capsys.readouterr().err == "Usage: loxvm [path]\n"


def test_main_runs_file(tmp_path, capsys):
    path = tmp_path / "prog.lox"
    path.write_text('"hello"')
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "hello\n"


def test_main_without_args_starts_repl(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("nil\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == "> nil\n> \n"