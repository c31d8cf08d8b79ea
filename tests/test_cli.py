"""
icvm command-line tests. main() is called in-process with argv lists.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import icvm


def _write(tmp_path, text, name="prog.txt"):
    path = tmp_path / name
    path.write_text(text + "\n", encoding="utf-8")
    return str(path)


class TestRunCommand:

    def test_run_with_input(self, tmp_path, capsys):
        prog = _write(tmp_path, "3,0,4,0,99")
        assert icvm.main(["run", prog, "--input", "7"]) == 0
        assert capsys.readouterr().out.strip() == "7"

    def test_run_dump_memory_with_patch(self, tmp_path, capsys):
        prog = _write(tmp_path, "1,0,0,0,99")
        assert icvm.main(["run", prog, "--patch", "2=4", "--dump-memory"]) == 0
        out = capsys.readouterr().out
        assert "100,0,4,0,99" in out

    def test_trace_goes_to_stderr(self, tmp_path, capsys):
        prog = _write(tmp_path, "104,5,99")
        assert icvm.main(["--trace", "run", prog]) == 0
        captured = capsys.readouterr()
        assert captured.out.strip() == "5"
        assert "000000: OUT" in captured.err

    def test_illegal_opcode_exit_code(self, tmp_path, capsys):
        prog = _write(tmp_path, "42")
        assert icvm.main(["run", prog]) == 1
        assert "Illegal opcode 42" in capsys.readouterr().err

    def test_missing_input_exit_code(self, tmp_path, capsys):
        prog = _write(tmp_path, "3,0,99")
        assert icvm.main(["run", prog]) == 1
        assert "more input" in capsys.readouterr().err

    def test_bad_program_text(self, tmp_path, capsys):
        prog = _write(tmp_path, "1,x,3")
        assert icvm.main(["run", prog]) == 1
        assert "Program format error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert icvm.main(["run", str(tmp_path / "nope.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_log_file(self, tmp_path, capsys):
        prog = _write(tmp_path, "104,5,99")
        log_path = tmp_path / "logs" / "icvm.log"
        assert icvm.main(["--log-file", str(log_path), "run", prog]) == 0
        assert log_path.exists()
        assert "output 5" in log_path.read_text(encoding="utf-8")


class TestOtherCommands:

    def test_disasm(self, tmp_path, capsys):
        prog = _write(tmp_path, "1002,4,3,4,33")
        assert icvm.main(["disasm", prog]) == 0
        out = capsys.readouterr().out
        assert "MUL  [4], #3, [4]" in out
        assert "DATA 33" in out

    def test_amplify_fixed_phases(self, tmp_path, capsys):
        prog = _write(tmp_path, "3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0")
        assert icvm.main(["amplify", prog, "--phases", "4,3,2,1,0"]) == 0
        assert capsys.readouterr().out.strip() == "43210"

    def test_amplify_search(self, tmp_path, capsys):
        prog = _write(tmp_path, "3,15,3,16,1002,16,10,16,1,16,15,15,4,15,99,0,0")
        assert icvm.main(["amplify", prog]) == 0
        assert capsys.readouterr().out.strip() == "43210 4,3,2,1,0"

    def test_paint(self, tmp_path, capsys):
        moves = [(1, 0), (0, 0), (1, 0), (1, 0), (0, 1), (1, 0), (1, 0)]
        cells = []
        for color, turn in moves:
            cells += [3, 1000, 104, color, 104, turn]
        prog = _write(tmp_path, ",".join(str(c) for c in cells + [99]))
        assert icvm.main(["paint", prog]) == 0
        lines = capsys.readouterr().out.strip().split("\n")
        assert lines[0] == "6"
        assert lines[1:] == ["..#", "..#", "##."]

    def test_gravity_patch(self, tmp_path, capsys):
        prog = _write(tmp_path, "1,0,0,0,99,10,20,30")
        assert icvm.main(["gravity", prog, "--noun", "6", "--verb", "7"]) == 0
        assert capsys.readouterr().out.strip() == "50"

    def test_gravity_target_not_found(self, tmp_path, capsys):
        prog = _write(tmp_path, "1,0,0,0,99")
        assert icvm.main(["gravity", prog, "--target", "-1"]) == 1
        assert "No noun/verb" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            icvm.main(["--version"])
        assert exc.value.code == 0
        assert "icvm" in capsys.readouterr().out
