"""
Tests for the Printer: windowing of the source, squeezing and border rows.
"""

import io
import logging

import pytest

from binview.border import BorderStyle
from binview.errors import ConfigInvariantViolation, ReadError
from binview.printer import NO_CONTENT_WARNING, Printer, PrinterConfig


def plain_config(**kwargs) -> PrinterConfig:
    kwargs.setdefault("border_style", BorderStyle.NONE)
    return PrinterConfig(**kwargs)


class ShortReads(io.RawIOBase):
    """Stream returning at most 3 bytes per read call."""

    def __init__(self, data: bytes):
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, size=-1):
        return self._data.read(min(size, 3) if size >= 0 else 3)


class FailingStream(io.RawIOBase):
    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("device not ready")


class TestLines:
    """Splitting the source into lines"""

    def test_chunks_reconstruct_input(self):
        data = bytes(range(256)) * 3 + b"tail"
        printer = Printer(plain_config())
        lines = list(printer.lines(data))

        assert b"".join(line.data for line in lines) == data
        assert all(len(line.data) == 16 for line in lines[:-1])
        assert len(lines[-1].data) == 4

    def test_offsets_increase_by_line_width(self):
        printer = Printer(plain_config())
        offsets = [line.offset for line in printer.lines(bytes(40))]
        assert offsets == [0, 16, 32]

    def test_only_last_line_is_flagged(self):
        printer = Printer(plain_config())
        flags = [line.is_last_line for line in printer.lines(bytes(48))]
        assert flags == [False, False, True]

    def test_length_limit(self):
        printer = Printer(plain_config(length=20))
        lines = list(printer.lines(bytes(100)))
        assert sum(len(line.data) for line in lines) == 20
        assert lines[-1].is_last_line

    def test_zero_length(self):
        printer = Printer(plain_config(length=0))
        assert list(printer.lines(b"data")) == []

    def test_skip_shifts_offsets(self):
        printer = Printer(plain_config(skip=0x100))
        assert next(iter(printer.lines(b"abc"))).offset == 0x100

    def test_short_reads_are_retried(self):
        data = bytes(range(50))
        printer = Printer(plain_config())
        lines = list(printer.lines(ShortReads(data)))

        assert [len(line.data) for line in lines] == [16, 16, 16, 2]
        assert b"".join(line.data for line in lines) == data

    def test_wider_rows(self):
        printer = Printer(plain_config(columns=4))
        assert printer.bytes_per_line == 32
        assert len(list(printer.lines(bytes(64)))) == 2


class TestRun:
    def test_single_short_line(self):
        output = list(Printer(plain_config()).run(b"AAAA"))
        assert len(output) == 1
        assert "41 41 41 41" in output[0]

    def test_zero_run_is_squeezed(self):
        output = list(Printer(plain_config()).run(bytes(32)))
        assert len(output) == 3
        assert output[1] == "*"
        assert output[0] == output[2].replace("00000010", "00000000")

    def test_long_zero_run(self):
        output = list(Printer(plain_config()).run(bytes(16 * 10)))
        assert output[1] == "*"
        assert len(output) == 3
        assert "00000090" in output[2]

    def test_squeezing_disabled(self):
        output = list(Printer(plain_config(squeeze_enabled=False)).run(bytes(16 * 10)))
        assert len(output) == 10
        assert "*" not in output

    def test_display_offset_bias(self):
        output = list(Printer(plain_config(display_offset_bias=16)).run(b"x"))
        assert output[0].startswith(" 00000010 ")

    def test_skip_and_bias_combine(self):
        config = plain_config(skip=0x10, display_offset_bias=0x20)
        output = list(Printer(config).run(b"x"))
        assert output[0].startswith(" 00000030 ")

    def test_borders_wrap_rows(self):
        output = list(Printer(PrinterConfig()).run(b"hello"))
        assert len(output) == 3
        assert output[0].startswith("┌")
        assert output[1].startswith("│00000000│")
        assert output[2].startswith("└")

    def test_empty_input(self, caplog):
        printer = Printer(PrinterConfig())
        with caplog.at_level(logging.WARNING, logger="binview"):
            output = list(printer.run(b""))

        assert output == []
        assert printer.warnings == [NO_CONTENT_WARNING]
        assert "No content to print" in caplog.text

    def test_offset_wider_than_eight_digits(self):
        """Offsets past 0xffffffff are printed in full, widening the row"""
        printer = Printer(plain_config(display_offset_bias=2**32))
        row = list(printer.run(b"ab"))[0]

        assert row.startswith(" 100000000  61 62 ")
        assert len(row) > printer.layout.width

    def test_repeated_runs_start_fresh(self):
        printer = Printer(PrinterConfig())
        list(printer.run(b""))
        list(printer.run(b""))
        assert printer.warnings == [NO_CONTENT_WARNING]

        list(printer.run(bytes(10)))
        assert printer.warnings == []
        assert printer.bytes_read == 10

    def test_bytes_read(self):
        printer = Printer(plain_config())
        list(printer.run(bytes(100)))
        assert printer.bytes_read == 100

    def test_read_error(self):
        printer = Printer(plain_config())
        output = printer.run(FailingStream())
        with pytest.raises(ReadError) as exc_info:
            next(output)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_print_all(self):
        out = io.StringIO()
        count = Printer(PrinterConfig()).print_all(b"0123456789abcdefXYZ", out)

        text = out.getvalue()
        assert count == 4
        assert text.endswith("\n")
        assert len(text.splitlines()) == 4
        assert "XYZ" in text.splitlines()[2]


class TestPrinterConfig:
    def test_defaults(self):
        config = PrinterConfig()
        assert config.group_size == 1
        assert config.columns == 2
        assert config.squeeze_enabled

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"group_size": 3},
            {"columns": 0},
            {"skip": -1},
            {"length": -5},
            {"skip": 10, "display_offset_bias": -11},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigInvariantViolation):
            PrinterConfig(**kwargs)

    def test_negative_bias_within_skip(self):
        config = PrinterConfig(skip=16, display_offset_bias=-16)
        output = list(Printer(config).run(b"a"))
        assert output[1].startswith("│00000000│")

    def test_frozen(self):
        config = PrinterConfig()
        with pytest.raises(Exception):
            config.group_size = 2
