# tools/machine_inspect.py

import argparse
import sys

from rich.console import Console
from rich.table import Table

from simulator.machine_loader import MachineLoadError, read_machine
from simulator.turing_machine import TuringMachine

console = Console(highlight=False)

def build_rule_table(definition):
    """Decoded rules in file order; the first row matching a (state, read) pair wins."""
    table = Table(title="Transition Rules", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("State", justify="center")
    table.add_column("Read", justify="center")
    table.add_column("Write", justify="center")
    table.add_column("Move", justify="center")
    table.add_column("Next State", justify="center")

    for idx, rule in enumerate(definition.rules):
        table.add_row(str(idx), rule.state, rule.read, rule.write, rule.move.value, rule.next_state)
    return table

def dry_run(definition, max_steps):
    machine = TuringMachine(definition)
    machine.run(max_steps=max_steps)
    return machine

def inspect_machine(path, max_steps=None, out=None):
    out = out or console
    try:
        definition = read_machine(path)
    except MachineLoadError as e:
        out.print(f"[red]Error: {e}[/red]")
        return 1

    out.print(f"[bold cyan]{path}[/bold cyan]")
    out.print(f"  Tape: {definition.tape!r}")
    out.print(f"  Initial position: {definition.initial_tape_position}")
    out.print(f"  Rules: {len(definition.rules)}")
    out.print(build_rule_table(definition))

    if max_steps is not None:
        machine = dry_run(definition, max_steps)
        out.print("\n=== Dry Run ===")
        out.print(f"  Steps: {machine.steps:,}")
        out.print(f"  Halt reason: {machine.halt_reason.value}")
        out.print(f"  Final state: {machine.current_state}")
        out.print(f"  Final tape: {machine.tape_text!r}")
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Inspector")
    parser.add_argument("file", help="Machine definition file (.txt or .json)")
    parser.add_argument("--max-steps", type=int, help="Run the machine without terminal output, at most this many steps (0 = no limit)")
    args = parser.parse_args(argv)

    return inspect_machine(args.file, max_steps=args.max_steps)

if __name__ == "__main__":
    sys.exit(main())
