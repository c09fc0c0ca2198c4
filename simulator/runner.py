import os
import sys
import threading
from dataclasses import dataclass
from functools import partial
from multiprocessing.pool import ThreadPool
from typing import Optional

from simulator.machine_loader import MachineLoadError, read_machine
from simulator.turing_machine import TuringMachine


@dataclass
class RunResult:
    path: str
    line_index: int
    steps: int = 0
    halt_reason: Optional[str] = None
    tape: Optional[str] = None
    error: Optional[str] = None

    def to_entry(self):
        return {
            "path": self.path,
            "line_index": self.line_index,
            "steps": self.steps,
            "halt_reason": self.halt_reason,
            "tape": self.tape,
            "error": self.error,
        }


def run_file(path, line_index, renderer=None, max_steps=0, logger=None):
    """Load one machine file and run it on its own output row.

    Load errors are shown on that row instead of the tape and never reach
    the other inputs.
    """
    try:
        definition = read_machine(path)
    except MachineLoadError as e:
        result = RunResult(path=str(path), line_index=line_index, error=str(e))
        if renderer is not None:
            renderer.render(line_index, f"Error: {e}")
    else:
        machine = TuringMachine(definition, line_index=line_index, renderer=renderer)
        machine.run(max_steps=max_steps)
        result = RunResult(
            path=str(path),
            line_index=line_index,
            steps=machine.steps,
            halt_reason=machine.halt_reason.value,
            tape=machine.tape_text,
        )

    if logger is not None:
        logger.log_run(result)
    return result


def resolve_workers(workers=0):
    return workers if workers > 0 else (os.cpu_count() or 1)


def run_machines(paths, renderer=None, workers=0, max_steps=0, logger=None):
    """Run every input concurrently; input i owns output row i.

    Returns the results in input order once all machines have halted.
    """
    paths = list(paths)
    if not paths:
        return []

    jobs = [(path, line_index) for line_index, path in enumerate(paths)]
    processes = min(resolve_workers(workers), len(jobs))

    with ThreadPool(processes=processes) as pool:
        results = pool.starmap(
            partial(run_file, renderer=renderer, max_steps=max_steps, logger=logger),
            jobs,
        )

    if logger is not None:
        logger.log_summary(results)
    return results


# === Shutdown listener ===
def wait_for_quit(line_index, renderer=None, message="App closed", stdin=None, exit_fn=None):
    stdin = stdin or sys.stdin
    exit_fn = exit_fn or os._exit
    line = stdin.readline()
    if not line:
        # EOF: nobody can press enter, let the runs finish.
        return False
    if renderer is not None:
        renderer.finish(line_index, message)
    exit_fn(0)
    return True


def start_quit_listener(line_index, renderer=None, message="App closed", stdin=None, exit_fn=None):
    """Exit the whole process as soon as one line of input arrives.

    This is an abrupt stop: running machines are not drained.
    """
    thread = threading.Thread(
        target=wait_for_quit,
        args=(line_index, renderer, message, stdin, exit_fn),
        daemon=True,
    )
    thread.start()
    return thread
