import io

import pytest

from camlgen import HEADER, Sink, SinkUnavailable, open_sink


def test_header_then_lines():
    buffer = io.StringIO()
    sink = Sink(buffer)
    sink.write_header()
    sink.write_line("type nonrec t")

    assert buffer.getvalue() == f"{HEADER}\ntype nonrec t\n"
    assert sink.lines_written == 1
    assert not sink.is_file


def test_header_written_once():
    sink = Sink(io.StringIO())
    sink.write_header()
    with pytest.raises(RuntimeError):
        sink.write_header()


@pytest.mark.parametrize("destination", [None, "-"])
def test_missing_destination_uses_stdout(destination):
    buffer = io.StringIO()
    with open_sink(destination, stdout=buffer) as sink:
        sink.write_line("end")
    assert buffer.getvalue() == "end\n"
    assert not buffer.closed


def test_default_stdout(capsys):
    with open_sink() as sink:
        sink.write_line("module M = struct")
    assert capsys.readouterr().out == "module M = struct\n"


def test_file_committed_on_success(tmp_path):
    target = tmp_path / "out" / "kimchi_types.ml"
    with open_sink(target) as sink:
        sink.write_header()
        sink.write_line("type nonrec t")
        assert sink.path == target
        assert not target.exists()

    assert target.read_text() == f"{HEADER}\ntype nonrec t\n"
    assert list(target.parent.iterdir()) == [target]


def test_failed_pass_leaves_no_file(tmp_path):
    target = tmp_path / "kimchi_types.ml"
    with pytest.raises(ValueError):
        with open_sink(target) as sink:
            sink.write_line("type nonrec t")
            raise ValueError("declaration failed")

    assert list(tmp_path.iterdir()) == []


def test_failed_pass_keeps_previous_file(tmp_path):
    target = tmp_path / "kimchi_types.ml"
    target.write_text("previous\n")
    with pytest.raises(ValueError):
        with open_sink(target):
            raise ValueError("declaration failed")
    assert target.read_text() == "previous\n"


def test_unwritable_destination(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    with pytest.raises(SinkUnavailable):
        with open_sink(blocker / "kimchi_types.ml"):
            pass


def test_committed_file_mode_follows_umask(tmp_path, monkeypatch):
    reference = tmp_path / "reference.ml"
    reference.write_text("")
    target = tmp_path / "kimchi_types.ml"

    def fail(mask):
        raise AssertionError("umask changed while opening a sink")

    monkeypatch.setattr("os.umask", fail)
    with open_sink(target) as sink:
        sink.write_line("type nonrec t")

    assert target.stat().st_mode & 0o777 == reference.stat().st_mode & 0o777
