"""Command line entry point for SerialComm."""

import argparse
import logging
import sys

from serialcomm.core.errors import ConfigurationError, LoggingError, PortError, SerialCommError
from serialcomm.core.settings import PRESETS, SerialSettings
from serialcomm.export.transcript import ERROR, INFO, TranscriptLogger
from serialcomm.serial.config import SerialConfig
from serialcomm.serial.discovery import PortDiscovery
from serialcomm.serial.handler import SerialPortHandler
from serialcomm.session.command_file import load_commands
from serialcomm.session.dispatcher import ModeDispatcher
from serialcomm.ui.console import ConsoleRenderer
from serialcomm.version import APP_NAME, DESCRIPTION, __version__

logger = logging.getLogger('serialcomm')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME.lower(),
        description=DESCRIPTION,
        epilog="Escape sequences \\r \\n \\x02 \\x03 \\x1B in commands are sent as control bytes.",
    )
    port = parser.add_argument_group("port")
    port.add_argument("-p", "--port", help=f"Serial port (default: {SerialConfig.DEFAULT_PORT})")
    port.add_argument("-b", "--baud", dest="baud_rate", type=int,
                      help=f"Baud rate (default: {SerialConfig.DEFAULT_BAUD})")
    port.add_argument("--parity", help="none, even, odd, mark or space (default: none)")
    port.add_argument("--data-bits", dest="data_bits", type=int, help="5, 6, 7 or 8 (default: 8)")
    port.add_argument("--stop-bits", dest="stop_bits", help="one, onepointfive or two (default: one)")
    port.add_argument("--timeout", dest="read_timeout", type=float,
                      help=f"Read timeout in seconds (default: {SerialConfig.DEFAULT_TIMEOUT})")
    port.add_argument("--preset",
                      help=f"Framing preset, overrides the flags above: {', '.join(PRESETS)}")
    port.add_argument("--list-ports", action="store_true", help="List serial ports and exit")

    modes = parser.add_argument_group("modes")
    modes.add_argument("-c", "--command-file", dest="command_file", help="Play commands from this file")
    modes.add_argument("-d", "--delay", dest="delay_ms", type=int,
                       help=f"Delay after each command in ms (default: {SerialConfig.DEFAULT_DELAY_MS})")
    modes.add_argument("-r", "--recursive", action="store_true", help="Replay the command file forever")
    modes.add_argument("-i", "--interactive", action="store_true", help="Type commands by hand")

    output = parser.add_argument_group("output")
    output.add_argument("-l", "--log-file", dest="log_file", help="Write a transcript to this file")
    output.add_argument("--max-log-size", dest="max_log_size_mb", type=float,
                        help=f"Rotate the transcript above this size in MB "
                             f"(default: {SerialConfig.DEFAULT_MAX_LOG_MB:g})")
    output.add_argument("-t", "--title", help="Terminal window title")
    output.add_argument("--no-color", dest="color", action="store_false", default=None,
                        help="Disable colored output")
    output.add_argument("-v", "--verbose", action="store_true", help="Diagnostic logging to stderr")
    output.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    logger.info(f"{APP_NAME} {__version__} starting")

    if args.list_ports:
        print(PortDiscovery.describe())
        return 0

    console = ConsoleRenderer(color=args.color is not False)
    try:
        settings = SerialSettings.from_args(args)
        settings.validate()
        commands = load_commands(settings.command_file) if settings.command_file else None
    except ConfigurationError as e:
        console.error(str(e))
        return 1

    settings.title = settings.title or APP_NAME
    console.set_title(settings.title)
    console.banner(settings, __version__)

    transcript = TranscriptLogger(settings.log_file, settings.max_log_size_mb)
    try:
        transcript.initialize(settings.summary())
    except LoggingError as e:
        console.error(str(e))
        return 1

    channel = SerialPortHandler(settings)
    exit_code = 0
    try:
        channel.open()
        transcript.append(INFO, f"Opened {settings.port} ({settings.framing()})")
        ModeDispatcher(settings, channel, console, transcript, commands=commands).run()
    except KeyboardInterrupt:
        console.info("Interrupted, closing port")
        transcript.append(INFO, "Interrupted by user")
    except PortError as e:
        console.error(str(e))
        console.info(f"Available ports:\n{PortDiscovery.describe()}")
        transcript.append(ERROR, str(e))
        exit_code = 1
    except (SerialCommError, OSError) as e:
        console.error(str(e))
        transcript.append(ERROR, str(e))
        exit_code = 1
    finally:
        channel.close()
        transcript.close()

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
