from dataclasses import dataclass
from enum import Enum

INITIAL_STATE = "0"


class Move(Enum):
    LEFT = "L"
    RIGHT = "R"

    @property
    def offset(self):
        return -1 if self is Move.LEFT else 1


class HaltReason(Enum):
    NO_RULE = "no_rule"
    OUT_OF_BOUNDS = "out_of_bounds"
    STEP_LIMIT = "step_limit"


@dataclass(frozen=True)
class Rule:
    state: str
    read: str
    write: str
    move: Move
    next_state: str


@dataclass(frozen=True)
class MachineDefinition:
    """Initial configuration of one machine, as produced by the loaders.

    The rule tuple is shared read-only by every engine built from it.
    """
    initial_tape_position: int
    tape: str
    rules: tuple = ()


def find_rule(rules, state, symbol):
    """Return the first rule matching (state, symbol), or None."""
    for rule in rules:
        if rule.state == state and rule.read == symbol:
            return rule
    return None


class TuringMachine:
    def __init__(self, definition: MachineDefinition, line_index=0, renderer=None):
        self.definition = definition
        self.rules = definition.rules
        self.line_index = line_index
        self.renderer = renderer
        self.reset()

    @property
    def tape_text(self) -> str:
        return "".join(self.tape)

    def read(self):
        """Symbol under the head, or None when the head is off the tape."""
        if 0 <= self.head < len(self.tape):
            return self.tape[self.head]
        return None

    def step(self) -> bool:
        """Apply one rule. Returns False (and records why) when the machine halts."""
        if self.halted:
            return False
        symbol = self.read()
        if symbol is None:
            self._halt(HaltReason.OUT_OF_BOUNDS)
            return False
        rule = find_rule(self.rules, self.current_state, symbol)
        if rule is None:
            self._halt(HaltReason.NO_RULE)
            return False

        self.tape[self.head] = rule.write
        self.current_state = rule.next_state
        self.head += rule.move.offset
        self.steps += 1

        if self.renderer is not None:
            self.renderer.render(self.line_index, self.tape_text)
        return True

    def run(self, max_steps=0):
        """Step until halt. max_steps=0 means no ceiling."""
        while self.step():
            if max_steps and self.steps >= max_steps and self._can_continue():
                self._halt(HaltReason.STEP_LIMIT)
                break
        return self.steps

    def reset(self):
        self.tape = list(self.definition.tape)
        self.head = self.definition.initial_tape_position
        self.current_state = INITIAL_STATE
        self.steps = 0
        self.halted = False
        self.halt_reason = None

    def _can_continue(self):
        symbol = self.read()
        return symbol is not None and find_rule(self.rules, self.current_state, symbol) is not None

    def _halt(self, reason):
        self.halted = True
        self.halt_reason = reason
