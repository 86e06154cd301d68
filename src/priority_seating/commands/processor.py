# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
CommandProcessor driving an allocation engine from command lines.

The processor owns the current engine, replaces it on every Initialize,
and produces exactly one rendered result per command, in command order.
Malformed lines are reported in the output and processing continues.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..config import EngineConfig, ProcessorConfig
from ..engine import AllocationEngine
from ..exceptions import (
    CommandParseError,
    EngineNotInitializedError,
    SeatingError,
    UnknownCommandError,
)
from ..observability.collector import UnifiedMetricsCollector
from ..types.results import InitializeResult
from .formatter import NOT_INITIALIZED_MESSAGE, TERMINATED_MESSAGE, format_result
from .models import Command, CommandName
from .parser import parse_line

logger = logging.getLogger(__name__)


class CommandProcessor:
    """
    Runs commands against an allocation engine and renders their results.

    Example:
        >>> processor = CommandProcessor()
        >>> processor.run(["Initialize(1)", "Reserve(7, 1)", "Available()"])
        ['Initialized with 1 seats.', 'User 7 reserved seat 1', 'Total Seats Available : 0, Waitlist : 0']
    """

    def __init__(
        self,
        config: ProcessorConfig | None = None,
        engine_config: EngineConfig | None = None,
        metrics: UnifiedMetricsCollector | None = None,
    ):
        """
        Initialize the CommandProcessor.

        Args:
            config: Processor configuration (defaults to ProcessorConfig())
            engine_config: Configuration for every engine created by Initialize
            metrics: Metrics collector shared by every engine created
        """
        self._config = config or ProcessorConfig()
        self._engine_config = engine_config
        self._metrics = metrics
        self._engine: AllocationEngine | None = None
        self._terminated = False

    @property
    def engine(self) -> AllocationEngine | None:
        """The engine created by the most recent Initialize, if any."""
        return self._engine

    @property
    def terminated(self) -> bool:
        """True once Quit() has been processed."""
        return self._terminated

    def execute(self, command: Command) -> str:
        """
        Run one command and render its result.

        Raises:
            EngineNotInitializedError: If the command needs an engine and
                Initialize has not run yet
            InvalidArgumentError: If the engine rejects an argument
        """
        name, args = command.name, command.args

        if name is CommandName.QUIT:
            self._terminated = True
            return TERMINATED_MESSAGE

        if name is CommandName.INITIALIZE:
            self._engine = AllocationEngine(
                args[0], config=self._engine_config, metrics=self._metrics
            )
            return format_result(InitializeResult(seat_count=args[0]))

        engine = self._engine
        if engine is None:
            raise EngineNotInitializedError(
                f"{name.value} requires Initialize to run first"
            )

        if name is CommandName.AVAILABLE:
            result: object = engine.available()
        elif name is CommandName.RESERVE:
            result = engine.reserve(args[0], args[1])
        elif name is CommandName.CANCEL:
            result = engine.cancel(seat_id=args[0], user_id=args[1])
        elif name is CommandName.EXIT_WAITLIST:
            result = engine.exit_waitlist(args[0])
        elif name is CommandName.UPDATE_PRIORITY:
            result = engine.update_priority(args[0], args[1])
        elif name is CommandName.ADD_SEATS:
            result = engine.add_seats(args[0])
        elif name is CommandName.PRINT_RESERVATIONS:
            result = engine.reservations()
        else:
            result = engine.release_range(args[0], args[1])

        return format_result(result)

    def process_line(self, line: str, line_number: int | None = None) -> str | None:
        """
        Parse and run one input line.

        Returns:
            The rendered result, or None for blank lines and for unknown
            commands when echo_unknown_commands is disabled
        """
        try:
            command = parse_line(line, line_number)
        except UnknownCommandError as e:
            logger.warning("Line %s: unknown command %r", line_number, e.command)
            if not self._config.echo_unknown_commands:
                return None
            return f"Unknown command: {e.command}"
        except CommandParseError as e:
            logger.warning("Line %s: %s", line_number, e)
            return f"Invalid command: {e}"

        if command is None:
            return None

        try:
            return self.execute(command)
        except EngineNotInitializedError:
            logger.warning("Line %s: %s before Initialize", line_number, command.name.value)
            return NOT_INITIALIZED_MESSAGE
        except SeatingError as e:
            logger.warning("Line %s: %s", line_number, e)
            return f"Invalid command: {e}"

    def run(self, lines: Iterable[str]) -> list[str]:
        """
        Process lines until they run out or Quit() is reached.

        Returns:
            One rendered result per processed command
        """
        outputs: list[str] = []
        for line_number, line in enumerate(lines, start=1):
            output = self.process_line(line, line_number)
            if output is not None:
                outputs.append(output)
            if self._terminated and self._config.stop_on_quit:
                break
        logger.debug("Processed %d results", len(outputs))
        return outputs

    def default_output_path(self, input_path: str | Path) -> Path:
        """Return the output path used when none is given: input path plus suffix."""
        return Path(f"{input_path}{self._config.output_suffix}")

    def run_file(
        self,
        input_path: str | Path,
        output_path: str | Path | None = None,
    ) -> Path:
        """
        Process a command file and write one result block per command.

        Args:
            input_path: File of commands, one per line
            output_path: Where to write results (default: input path plus
                the configured output suffix)

        Returns:
            The path written

        Raises:
            OSError: If the input cannot be read or the output cannot be written
            UnicodeDecodeError: If the input is not valid in the configured encoding
        """
        input_path = Path(input_path)
        target = Path(output_path) if output_path is not None else self.default_output_path(input_path)

        with input_path.open(encoding=self._config.encoding) as infile:
            outputs = self.run(infile)

        with target.open("w", encoding=self._config.encoding) as outfile:
            for output in outputs:
                outfile.write(output)
                outfile.write("\n")

        logger.info("Wrote %d results from %s to %s", len(outputs), input_path, target)
        return target


__all__ = ["CommandProcessor"]
