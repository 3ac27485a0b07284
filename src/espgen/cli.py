"""Command-line interface for espgen."""

import argparse
import logging
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .assistant import Assistant, has_code_fences, strip_code_fences
from .generator import DEFAULT_OUTPUT_FILENAME, ConfigGenerator
from .watch import watch

STARTER_CONFIG = """\
device:
  name: living-room-lamp
  friendly_name: Living Room Lamp
  platform: ESP32
  board: esp32dev

wifi:
  ssid: "!secret wifi_ssid"
  password: "!secret wifi_password"

features:
  logger: true
  api: true
  ota: true
  web_server: true

sensors: []
binary_sensors: []
switches: []
lights:
  - id: lamp
    name: Lamp
    kind: binary
    pin: GPIO13
buttons: []
"""


def add_output_argument(parser: argparse.ArgumentParser, default: Path | None) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=default,
        help="Output file (relative to invocation directory)",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="espgen",
        description="ESPHome configuration generator - Generate device YAML from descriptions",
    )
    ap.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")

    subparsers = ap.add_subparsers(dest="command", help="Command to run")

    build = subparsers.add_parser("build", help="Generate a configuration document")
    build.add_argument("input", type=Path, help="Input device description (YAML)")
    add_output_argument(build, Path.cwd() / DEFAULT_OUTPUT_FILENAME)
    build.add_argument(
        "--stdout", action="store_true", help="Print the document instead of writing it"
    )

    init = subparsers.add_parser("init", help="Write a starter device description")
    init.add_argument("path", nargs="?", type=Path, default=Path("device.yml"))
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    assistant_options = argparse.ArgumentParser(add_help=False)
    assistant_options.add_argument(
        "--api-key", default=None, help="API key (also: ESPGEN_API_KEY env var)"
    )
    assistant_options.add_argument(
        "--model", default=None, help="Model name (also: ESPGEN_MODEL env var)"
    )

    ask = subparsers.add_parser(
        "ask", parents=[assistant_options], help="Describe a device and let the assistant write it"
    )
    ask.add_argument("prompt", help="Natural-language request")
    ask.add_argument(
        "--context", type=Path, default=None, help="Existing document to modify"
    )
    add_output_argument(ask, None)

    fix = subparsers.add_parser(
        "fix", parents=[assistant_options], help="Let the assistant repair a document"
    )
    fix.add_argument("file", type=Path, help="Document to repair")
    error_group = fix.add_mutually_exclusive_group(required=True)
    error_group.add_argument("--error", help="Validator error message")
    error_group.add_argument(
        "--error-file", type=Path, help="File containing the validator output"
    )
    add_output_argument(fix, None)

    strip = subparsers.add_parser("strip", help="Remove markdown fences from a document")
    strip.add_argument("file", type=Path, help="Document to clean")
    strip.add_argument(
        "--check", action="store_true", help="Only report whether fences are present"
    )

    watch_sub = subparsers.add_parser(
        "watch", help="Regenerate the document whenever the description changes"
    )
    watch_sub.add_argument("input", type=Path, help="Input device description (YAML)")
    add_output_argument(watch_sub, Path.cwd() / DEFAULT_OUTPUT_FILENAME)
    watch_sub.add_argument(
        "--interval", type=float, default=0.25, help="Polling interval in seconds"
    )
    watch_sub.add_argument(
        "--wait", type=float, default=0.5, help="Quiet period before regenerating"
    )
    watch_sub.add_argument(
        "--poll",
        action="store_true",
        help="Poll the file instead of using filesystem events (network mounts)",
    )

    return ap


def write_or_print(text: str, output: Path | None, log: logging.Logger) -> None:
    if output is None:
        print(text)
        return
    output.write_text(text + "\n")
    log.info(f"Wrote {output.as_posix()}")


def run_build(args: argparse.Namespace, log: logging.Logger) -> int:
    code_gen = ConfigGenerator()
    if args.stdout:
        config = code_gen.validate(code_gen.parse_yaml(args.input))
        print(code_gen.render(config), end="")
    else:
        code_gen.generate_from_file(args.input, args.output)
    return 0


def run_init(args: argparse.Namespace, log: logging.Logger) -> int:
    if args.path.exists() and not args.force:
        log.error(f"File already exists: {args.path}")
        return 1
    args.path.write_text(STARTER_CONFIG)
    log.info(f"Created {args.path.as_posix()}")
    log.info(f"Next: espgen build {args.path.as_posix()}")
    return 0


def run_ask(args: argparse.Namespace, log: logging.Logger) -> int:
    current = args.context.read_text() if args.context else None
    with Assistant(api_key=args.api_key, model=args.model) as assistant:
        result = assistant.create(args.prompt, current)
    if not result.ok:
        log.error(f"No document generated: {result.error}")
        return 1
    write_or_print(result.text, args.output, log)
    return 0


def run_fix(args: argparse.Namespace, log: logging.Logger) -> int:
    current = args.file.read_text()
    error_message = args.error if args.error is not None else args.error_file.read_text()
    with Assistant(api_key=args.api_key, model=args.model) as assistant:
        result = assistant.fix(current, error_message)
    if not result.ok:
        log.error(f"{args.file.as_posix()} left unchanged: {result.error}")
        return 1
    write_or_print(result.text, args.output or args.file, log)
    return 0


def run_strip(args: argparse.Namespace, log: logging.Logger) -> int:
    text = args.file.read_text()
    if not has_code_fences(text):
        log.info("No markdown fences found")
        return 0
    if args.check:
        log.warning(f"{args.file} is wrapped in markdown fences")
        return 1
    args.file.write_text(strip_code_fences(text) + "\n")
    log.info(f"Removed markdown fences from {args.file.as_posix()}")
    return 0


def run_watch(args: argparse.Namespace, log: logging.Logger) -> int:
    try:
        watch(
            args.input,
            args.output,
            interval=args.interval,
            wait=args.wait,
            mode="poll" if args.poll else "event",
        )
    except KeyboardInterrupt:
        log.info("Stopped watching")
    return 0


COMMANDS = {
    "build": run_build,
    "init": run_init,
    "ask": run_ask,
    "fix": run_fix,
    "strip": run_strip,
    "watch": run_watch,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for espgen CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()

    ap = build_parser()
    args = ap.parse_args(argv)

    # Setup logging
    log = logging.getLogger("espgen")
    log_level = logging.DEBUG if args.debug else logging.INFO
    log.handlers = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            show_time=False,
        )
    ]
    log.setLevel(log_level)

    if args.command is None:
        ap.print_help()
        return 1

    try:
        result = COMMANDS[args.command](args, log)
    except Exception as e:
        log.error(f"{args.command.capitalize()} failed: {e}")
        if args.debug:
            raise
        return 1

    end_time = time.time()
    log.debug(f"Done after {end_time - start_time:.2f} seconds.")
    return result


if __name__ == "__main__":
    sys.exit(main())
