"""Tests for CommandProcessor."""

import pytest

from priority_seating.commands import Command, CommandName, CommandProcessor
from priority_seating.config import EngineConfig, ProcessorConfig
from priority_seating.exceptions import EngineNotInitializedError


@pytest.fixture
def processor(metrics):
    return CommandProcessor(
        engine_config=EngineConfig(check_invariants=True),
        metrics=metrics,
    )


class TestExecute:
    """Tests for running parsed commands."""

    def test_requires_initialize(self, processor):
        """Test engine commands fail before Initialize."""
        with pytest.raises(EngineNotInitializedError):
            processor.execute(Command(name=CommandName.AVAILABLE))

    def test_initialize_creates_engine(self, processor):
        """Test Initialize creates a fresh engine."""
        output = processor.execute(Command(name=CommandName.INITIALIZE, args=(2,)))

        assert output == "Initialized with 2 seats."
        assert processor.engine.available().free_seats == 2

    def test_reinitialize_discards_state(self, processor):
        """Test a second Initialize replaces the engine."""
        processor.run(["Initialize(1)", "Reserve(1, 1)"])
        first = processor.engine

        processor.execute(Command(name=CommandName.INITIALIZE, args=(3,)))

        assert processor.engine is not first
        assert processor.engine.seat_of(1) is None

    def test_quit(self, processor):
        """Test Quit terminates even without an engine."""
        assert processor.execute(Command(name=CommandName.QUIT)) == "Program Terminated!!"
        assert processor.terminated


class TestProcessLine:
    """Tests for per-line error handling."""

    def test_not_initialized(self, processor):
        """Test commands before Initialize report the missing engine."""
        assert processor.process_line("Reserve(1, 1)") == "System is not initialized"

    def test_unknown_command_echoed(self, processor):
        """Test unknown commands are reported by name."""
        assert processor.process_line("Dance(1)") == "Unknown command: Dance"

    def test_unknown_command_skipped(self):
        """Test unknown commands can be skipped silently."""
        processor = CommandProcessor(config=ProcessorConfig(echo_unknown_commands=False))
        assert processor.process_line("Dance(1)") is None

    def test_malformed_arguments(self, processor):
        """Test malformed arguments are reported and processing continues."""
        processor.process_line("Initialize(1)")

        assert processor.process_line("Reserve(x, 1)").startswith("Invalid command: ")
        assert processor.process_line("Reserve(1, 1)") == "User 1 reserved seat 1"

    def test_blank_line(self, processor):
        """Test blank lines produce no output."""
        assert processor.process_line("   ") is None


class TestRun:
    """Tests for running line sequences."""

    def test_sample_session(self, processor):
        """Test a full session produces one block per command."""
        outputs = processor.run(
            [
                "Initialize(2)",
                "Reserve(1, 1)",
                "Reserve(2, 1)",
                "Reserve(3, 2)",
                "Available()",
                "Cancel(1, 1)",
                "PrintReservations()",
                "Quit()",
            ]
        )

        assert outputs == [
            "Initialized with 2 seats.",
            "User 1 reserved seat 1",
            "User 2 reserved seat 2",
            "User 3 is added to the waiting list",
            "Total Seats Available : 0, Waitlist : 1",
            "User 1 canceled their reservation.\nUser 3 reserved seat 1",
            "Seat 1, User 3\nSeat 2, User 2",
            "Program Terminated!!",
        ]

    def test_stops_after_quit(self, processor):
        """Test lines after Quit are not processed."""
        outputs = processor.run(["Initialize(1)", "Quit()", "Reserve(1, 1)"])

        assert outputs[-1] == "Program Terminated!!"
        assert processor.engine.seat_of(1) is None

    def test_continues_after_quit_when_configured(self, metrics):
        """Test stop_on_quit can be disabled."""
        processor = CommandProcessor(
            config=ProcessorConfig(stop_on_quit=False), metrics=metrics
        )
        outputs = processor.run(["Initialize(1)", "Quit()", "Reserve(1, 1)"])

        assert outputs[-1] == "User 1 reserved seat 1"

    def test_invalid_seat_count_reported(self, processor):
        """Test a non-positive seat count is reported and skipped."""
        outputs = processor.run(["Initialize(0)", "Available()"])

        assert outputs == [
            "Invalid command: Initialize seat count must be positive",
            "System is not initialized",
        ]


class TestRunFile:
    """Tests for file processing."""

    def test_default_output_path(self, processor, tmp_path):
        """Test results land next to the input with the default suffix."""
        input_path = tmp_path / "commands.txt"
        input_path.write_text("Initialize(1)\nReserve(5, 1)\nQuit()\n", encoding="utf-8")

        target = processor.run_file(input_path)

        assert target == tmp_path / "commands.txt_output_file.txt"
        assert target.read_text(encoding="utf-8") == (
            "Initialized with 1 seats.\nUser 5 reserved seat 1\nProgram Terminated!!\n"
        )

    def test_explicit_output_path(self, processor, tmp_path):
        """Test an explicit output path is honored."""
        input_path = tmp_path / "in.txt"
        input_path.write_text("Initialize(3)\nAvailable()\n", encoding="utf-8")
        output_path = tmp_path / "out.txt"

        assert processor.run_file(input_path, output_path) == output_path
        assert output_path.read_text(encoding="utf-8").splitlines() == [
            "Initialized with 3 seats.",
            "Total Seats Available : 3, Waitlist : 0",
        ]

    def test_missing_input(self, processor, tmp_path):
        """Test a missing input file raises OSError."""
        with pytest.raises(OSError):
            processor.run_file(tmp_path / "missing.txt")

    def test_undecodable_input(self, processor, tmp_path):
        """Test invalid bytes raise before any output is written."""
        input_path = tmp_path / "bad.txt"
        input_path.write_bytes(b"Initialize(1)\n\xff\xfe\n")

        with pytest.raises(UnicodeDecodeError):
            processor.run_file(input_path)
        assert not (tmp_path / "bad.txt_output_file.txt").exists()
