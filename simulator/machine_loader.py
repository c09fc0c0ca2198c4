import json
import re
from pathlib import Path

from simulator.turing_machine import MachineDefinition, Move, Rule


class MachineLoadError(Exception):
    pass


POSITION_PATTERN = re.compile(r"[+-]?[0-9]+")
POSITION_LIMIT = 2 ** 63


def check_position(value):
    if not -POSITION_LIMIT <= value < POSITION_LIMIT:
        raise MachineLoadError("Initial tape position is out of range")
    return value


def parse_position_text(text):
    """Signed ASCII decimal only; no underscores or other digit scripts."""
    text = text.strip()
    if not POSITION_PATTERN.fullmatch(text):
        raise MachineLoadError(f"Invalid initial tape position: {text!r}")
    # keeps int() clear of the digit-count limit; 2**63 has 19 digits
    if len(text.lstrip("+-").lstrip("0")) > 19:
        raise MachineLoadError("Initial tape position is out of range")
    return check_position(int(text))


# === Tabular format (.txt) ===
def parse_txt_rule(line):
    """Decode 'state read write move next_state'. Returns None for a bad line."""
    fields = line.split()
    if len(fields) < 5:
        return None
    state, read, write, move, next_state = fields[:5]
    if move[0] == "L":
        direction = Move.LEFT
    elif move[0] == "R":
        direction = Move.RIGHT
    else:
        return None
    return Rule(state, read[0], write[0], direction, next_state)


def parse_txt(contents):
    lines = [line for line in contents.splitlines() if line]
    if len(lines) < 2:
        raise MachineLoadError("Missing tape or initial tape position")

    position = parse_position_text(lines[1])

    rules = []
    for line in lines[2:]:
        rule = parse_txt_rule(line)
        if rule is not None:
            rules.append(rule)

    return MachineDefinition(initial_tape_position=position, tape=lines[0], rules=tuple(rules))


# === Structured format (.json) ===
def parse_json_rule(entry):
    """Decode one rule object. Returns None when any field is missing or malformed."""
    if not isinstance(entry, dict):
        return None
    state = entry.get("state")
    read = entry.get("read")
    write = entry.get("write")
    move = entry.get("move")
    next_state = entry.get("nextState")

    if not isinstance(state, str) or not isinstance(next_state, str):
        return None
    if not isinstance(read, str) or len(read) != 1:
        return None
    if not isinstance(write, str) or len(write) != 1:
        return None
    if move not in ("L", "R"):
        return None
    return Rule(state, read, write, Move(move), next_state)


def parse_position(value):
    if isinstance(value, bool):
        raise MachineLoadError(f"Invalid initial tape position: {value!r}")
    if isinstance(value, int):
        return check_position(value)
    if isinstance(value, str):
        return parse_position_text(value)
    raise MachineLoadError(f"Invalid initial tape position: {value!r}")


def parse_json(contents):
    try:
        data = json.loads(contents)
    except (ValueError, RecursionError):
        # JSONDecodeError, oversized integer literals, too deeply nested arrays
        raise MachineLoadError("Something went wrong with parsing json data") from None

    if not isinstance(data, dict):
        raise MachineLoadError("Machine definition must be a JSON object")

    rules_data = data.get("rules")
    if not isinstance(rules_data, list):
        raise MachineLoadError("Machine definition needs a 'rules' array")

    tape = data.get("tape", "")
    if not isinstance(tape, str):
        raise MachineLoadError("Machine 'tape' must be a string")

    position = parse_position(data.get("initialTapePosition", "0"))

    rules = []
    for entry in rules_data:
        rule = parse_json_rule(entry)
        if rule is not None:
            rules.append(rule)

    return MachineDefinition(initial_tape_position=position, tape=tape, rules=tuple(rules))


PARSERS = {
    ".txt": parse_txt,
    ".json": parse_json,
}


def read_machine(path):
    """Load a machine definition, choosing the format by file extension."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError):
        raise MachineLoadError(f"Something went wrong with reading file {path}") from None

    parser = PARSERS.get(path.suffix)
    if parser is None:
        raise MachineLoadError("Unsupported file extension")
    return parser(contents)
