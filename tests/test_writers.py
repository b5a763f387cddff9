import io
import threading
import time

import pytest

from composeops.progress import writers
from composeops.progress.event import Event, EventStatus, Spinner, new_event
from composeops.progress.writers import (
    Mode,
    NoopWriter,
    PlainWriter,
    TTYWriter,
    align,
    context_writer,
    line_text,
    new_writer,
    num_done,
    run,
    run_with_status,
    with_context_writer,
)


def _event(status, end=True):
    now = time.monotonic()
    return Event(
        id="id",
        text="Text",
        status=status,
        status_text="Status",
        start_time=now,
        end_time=now if end else None,
        spinner=Spinner(chars=["."]),
    )


def test_line_text():
    ev = _event(EventStatus.WORKING)
    width = len(f"{ev.id} {ev.text}")
    assert line_text(ev, "", 50, width, True) == "\x1b[37m . id Text Status                            0.0s\n\x1b[0m"
    assert line_text(ev, "", 50, width, False) == " . id Text Status                            0.0s\n"
    ev.status = EventStatus.DONE
    assert line_text(ev, "", 50, width, True) == "\x1b[34m . id Text Status                            0.0s\n\x1b[0m"
    ev.status = EventStatus.ERROR
    assert line_text(ev, "", 50, width, True) == "\x1b[31m . id Text Status                            0.0s\n\x1b[0m"


def test_line_text_single_event():
    ev = _event(EventStatus.DONE, end=False)
    width = len(f"{ev.id} {ev.text}")
    assert line_text(ev, "", 50, width, True) == "\x1b[34m . id Text Status                            0.0s\n\x1b[0m"


def test_line_text_truncates_long_status():
    ev = _event(EventStatus.DONE)
    ev.status_text = "Status " * 10
    out = line_text(ev, "", 40, len("id Text"), False)
    assert "..." in out
    assert ev.status_text not in out


def test_error_event_sets_end_time():
    w = TTYWriter(io.StringIO())
    e = Event(id="id", text="Text", status=EventStatus.WORKING, status_text="Working")
    w.event(e)
    assert w["id"].end_time is None
    before = time.monotonic()
    e.status = EventStatus.ERROR
    w.event(e)
    stored = w["id"]
    assert stored.end_time is not None and stored.end_time >= before
    assert stored.status is EventStatus.ERROR


def test_tty_event_does_not_alias_caller_event():
    w = TTYWriter(io.StringIO())
    e = new_event("svc", EventStatus.WORKING, "Pulling")
    w.event(e)
    assert e.spinner is None
    assert w["svc"] is not e


def test_noop_writer_is_default():
    assert context_writer() == NoopWriter()


def test_with_context_writer_restores():
    w = PlainWriter(io.StringIO())
    with with_context_writer(w):
        assert context_writer() is w
    assert context_writer() == NoopWriter()


def test_align_places_right_at_width():
    out = align("ab", "cd", 10)
    assert len(out) == 10
    assert out.startswith("ab ") and out.endswith(" cd")


def test_align_overflow_keeps_both_parts():
    out = align("abc", "xyz", 2)
    assert out.startswith("abc") and out.endswith(" xyz")


def test_num_done_counts_done_only():
    events = {
        "a": new_event("a", EventStatus.DONE, ""),
        "b": new_event("b", EventStatus.DONE, ""),
        "c": new_event("c", EventStatus.ERROR, ""),
        "d": new_event("d", EventStatus.WORKING, ""),
    }
    assert num_done(events) == 2


def test_plain_writer_output():
    out = io.StringIO()
    w = PlainWriter(out)
    w.events([new_event("web", EventStatus.DONE, "Started")])
    w.tail_msgf("Pulling %s", "db")
    assert out.getvalue() == "web  Started\nPulling %s db\n"


def test_tty_tail_messages_are_formatted():
    out = io.StringIO()
    w = TTYWriter(out)
    w.tail_msgf("Pulling %s: %s", "web", "boom")
    w.print_tail_events()
    assert out.getvalue() == "Pulling web: boom\n"


def test_tty_render_header_and_cursor(monkeypatch):
    monkeypatch.setenv("COLUMNS", "80")
    out = io.StringIO()
    w = TTYWriter(out)
    w.event(new_event("web", EventStatus.DONE, "Started"))
    w.render()
    first = out.getvalue()
    assert first.startswith("\x1b[1A\x1b[1B\x1b[0G")
    assert "[+] Running 1/0\n" in first
    assert first.endswith("\x1b[?25h")
    out.truncate(0)
    out.seek(0)
    w.render()
    second = out.getvalue()
    assert second.startswith("\x1b[1A\x1b[1A\x1b[0G")
    assert "\x1b[34m[+] Running 1/1\x1b[0m\n" in second


def test_tty_render_counts_children(monkeypatch):
    monkeypatch.setenv("COLUMNS", "80")
    out = io.StringIO()
    w = TTYWriter(out)
    w.event(new_event("parent", EventStatus.WORKING, "Pulling"))
    child = new_event("child", EventStatus.WORKING, "Downloading")
    child.parent_id = "parent"
    w.event(child)
    w.render()
    assert " child " in out.getvalue()
    out.truncate(0)
    out.seek(0)
    w.render()
    assert "[+] Running 0/2\n" in out.getvalue()


def test_tty_repeated_id_is_drawn_once(monkeypatch):
    monkeypatch.setenv("COLUMNS", "80")
    out = io.StringIO()
    w = TTYWriter(out)
    w.event(new_event("web", EventStatus.WORKING, "Starting"))
    w.event(new_event("web", EventStatus.DONE, "Started"))
    w.render()
    text = out.getvalue()
    assert "[+] Running 1/0" in text
    assert text.count(" web ") == 1


def test_tty_start_stop_renders_and_prints_tail(monkeypatch):
    monkeypatch.setenv("COLUMNS", "80")
    out = io.StringIO()
    w = TTYWriter(out)
    thread = threading.Thread(target=w.start)
    thread.start()
    w.event(new_event("web", EventStatus.DONE, "Started"))
    w.tail_msgf("bye")
    w.stop()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert out.getvalue().endswith("bye\n")
    assert "[+] Running" in out.getvalue()


def test_new_writer_modes():
    tty_out = io.StringIO()
    tty = new_writer(tty_out, Mode.TTY)
    assert isinstance(tty, TTYWriter)
    tty.tail_msgf("Pulling %s", "web")
    tty.print_tail_events()
    assert tty_out.getvalue() == "Pulling web\n"

    plain_out = io.StringIO()
    plain = new_writer(plain_out, "plain")
    assert isinstance(plain, PlainWriter)
    plain.event(new_event("web", EventStatus.DONE, "Started"))
    assert plain_out.getvalue() == "web  Started\n"

    auto_out = io.StringIO()
    auto = new_writer(auto_out, Mode.AUTO)
    assert isinstance(auto, PlainWriter)
    auto.event(new_event("db", EventStatus.WORKING, "Starting"))
    assert auto_out.getvalue() == "db  Starting\n"


def test_new_writer_rejects_unknown_mode():
    with pytest.raises(ValueError):
        new_writer(io.StringIO(), "fancy")


def test_run_with_status_returns_result(monkeypatch, capsys):
    monkeypatch.setattr(writers, "current_mode", Mode.PLAIN)

    def work():
        context_writer().event(new_event("svc", EventStatus.DONE, "Started"))
        return "ok"

    assert run_with_status(work) == "ok"
    assert "svc  Started" in capsys.readouterr().err
    assert context_writer() == NoopWriter()


def test_run_propagates_errors(monkeypatch):
    monkeypatch.setattr(writers, "current_mode", Mode.PLAIN)

    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run(fail)
    assert context_writer() == NoopWriter()