"""Tests for the command line entry point and top-level error handling."""

import pytest

from serialcomm import main as main_module
from serialcomm.core.errors import ChannelError
from serialcomm.main import main
from serialcomm.session.dispatcher import ModeDispatcher


@pytest.fixture(autouse=True)
def no_port_enumeration(monkeypatch):
    monkeypatch.setattr(main_module.PortDiscovery, "describe", classmethod(lambda cls: "  loop://"))


def fake_run(exc):
    def run(self):
        assert self.channel.is_open
        raise exc
    return run


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "--command-file" in capsys.readouterr().out


def test_list_ports(capsys):
    assert main(["--list-ports"]) == 0
    assert "loop://" in capsys.readouterr().out


def test_configuration_error_exits_nonzero(capsys):
    assert main(["-p", "loop://", "--parity", "maybe"]) == 1
    assert "Invalid parity" in capsys.readouterr().out


def test_unknown_preset_exits_nonzero(capsys):
    assert main(["-p", "loop://", "--preset", "Modem"]) == 1
    assert "Unknown preset" in capsys.readouterr().out


def test_log_directory_failure_exits_nonzero(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    assert main(["-p", "loop://", "-l", str(blocker / "run.log")]) == 1


def test_port_error_exits_nonzero(tmp_path, capsys):
    log = tmp_path / "run.log"
    assert main(["-p", str(tmp_path / "ttyNOPE"), "-l", str(log)]) == 1
    out = capsys.readouterr().out
    assert "Cannot open" in out
    assert "Available ports" in out
    text = log.read_text()
    assert "[ERROR] Cannot open" in text
    assert "Ended at" in text


def test_interrupt_exits_zero_and_closes_log(tmp_path, monkeypatch):
    monkeypatch.setattr(ModeDispatcher, "run", fake_run(KeyboardInterrupt()))
    log = tmp_path / "logs" / "run.log"
    assert main(["-p", "loop://", "--preset", "EnergyMeter", "-l", str(log)]) == 0
    text = log.read_text()
    assert "Baud: 9600, Parity: Even, DataBits: 7, StopBits: One, Preset: EnergyMeter" in text
    assert "[INFO] Opened loop:// (9600 7E1)" in text
    assert "[INFO] Interrupted by user" in text
    assert text.rstrip().endswith("=====")
    assert "Ended at" in text


def test_channel_error_exits_nonzero(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(ModeDispatcher, "run", fake_run(ChannelError("device unplugged")))
    log = tmp_path / "run.log"
    assert main(["-p", "loop://", "-l", str(log)]) == 1
    assert "device unplugged" in capsys.readouterr().out
    assert "[ERROR] device unplugged" in log.read_text()


def test_channel_closed_on_exit(monkeypatch):
    seen = {}

    def run(self):
        seen["channel"] = self.channel
        raise KeyboardInterrupt

    monkeypatch.setattr(ModeDispatcher, "run", run)
    assert main(["-p", "loop://"]) == 0
    assert not seen["channel"].is_open


def test_undecodable_command_file_fails_before_port_opens(tmp_path, monkeypatch, capsys):
    opened = []
    monkeypatch.setattr(main_module.SerialPortHandler, "open", lambda self: opened.append(self))
    script = tmp_path / "cmds.txt"
    script.write_bytes(b"AT\xff\xfe\n")
    log = tmp_path / "run.log"
    assert main(["-p", "loop://", "-c", str(script), "-l", str(log)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().out
    assert opened == []
    assert not log.exists()


def test_command_file_read_once_and_handed_to_dispatcher(tmp_path, monkeypatch):
    seen = {}

    def run(self):
        seen["commands"] = self._load_commands()
        raise KeyboardInterrupt

    monkeypatch.setattr(ModeDispatcher, "run", run)
    script = tmp_path / "cmds.txt"
    script.write_text("# readout\nATI\\r\n", encoding="utf-8")
    assert main(["-p", "loop://", "-c", str(script)]) == 0
    assert seen["commands"] == ["ATI\\r"]
