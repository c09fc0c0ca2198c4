# app.py

import argparse
import sys

from rich.console import Console

from config.config_loader import load_config
from logger.logger import JSONLogger
from simulator.render import TerminalRenderer
from simulator.runner import run_machines, start_quit_listener

console = Console(highlight=False)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Turing Machine Runner: run machine files side by side, one terminal row each. Press enter to quit."
    )
    parser.add_argument("files", nargs="*", help="Machine definition files (.txt or .json)")
    return parser


def main(argv=None, config_path=None, renderer=None, stdin=None, exit_fn=None):
    args = build_parser().parse_args(argv)

    try:
        config = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        return 1

    renderer = renderer or TerminalRenderer(console)
    logger = None
    if config["enable_logging"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    if config["clear_screen"]:
        renderer.clear()

    # The row after the last machine takes the quit message and the final cursor.
    footer_line = len(args.files)
    start_quit_listener(footer_line, renderer, config["quit_message"], stdin=stdin, exit_fn=exit_fn)

    run_machines(
        args.files,
        renderer=renderer,
        workers=config["workers"],
        max_steps=config["max_steps"],
        logger=logger,
    )

    renderer.finish(footer_line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
