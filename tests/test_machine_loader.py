from __future__ import annotations

import json
from pathlib import Path

import pytest

from simulator.machine_loader import (
    MachineLoadError,
    parse_json,
    parse_txt,
    read_machine,
)
from simulator.turing_machine import MachineDefinition, Move, Rule, TuringMachine

REPO_ROOT = Path(__file__).resolve().parents[1]


# === Tabular ===
def test_parse_txt_reads_tape_position_and_rules() -> None:
    definition = parse_txt("100\n0\n0 1 0 R 0\n0 0 1 L 0\n")

    assert definition == MachineDefinition(
        initial_tape_position=0,
        tape="100",
        rules=(
            Rule("0", "1", "0", Move.RIGHT, "0"),
            Rule("0", "0", "1", Move.LEFT, "0"),
        ),
    )


def test_parse_txt_keeps_full_tape_and_signed_position() -> None:
    tape = "abcdefghij" * 50
    definition = parse_txt(f"{tape}\n-7\n")

    assert definition.tape == tape
    assert definition.initial_tape_position == -7
    assert definition.rules == ()


def test_parse_txt_ignores_blank_lines_and_crlf() -> None:
    definition = parse_txt("\r\n110\r\n\r\n  2 \r\n\r\n0 1 1 R 0\r\n")
    assert definition.tape == "110"
    assert definition.initial_tape_position == 2
    assert len(definition.rules) == 1


def test_parse_txt_drops_rules_with_bad_move_or_missing_fields() -> None:
    good = "1\n0\nA 1 0 R B\nA 0 1 L B\n"
    noisy = "1\n0\nA 1 0 R B\nA 1 0 X B\nA 1 0 R\nA 0 1 L B\n"

    assert parse_txt(noisy) == parse_txt(good)


def test_parse_txt_keeps_a_tape_of_spaces() -> None:
    definition = parse_txt("   \n1\n0 _ x R 0\n")
    assert definition.tape == "   "
    assert definition.initial_tape_position == 1


def test_parse_txt_position_limits() -> None:
    assert parse_txt("1\n+0009223372036854775807\n").initial_tape_position == 2 ** 63 - 1
    assert parse_txt("1\n-9223372036854775808\n").initial_tape_position == -(2 ** 63)
    with pytest.raises(MachineLoadError, match="out of range"):
        parse_txt("1\n9223372036854775808\n")


def test_parse_txt_uses_first_character_of_symbol_and_move_fields() -> None:
    definition = parse_txt("1\n0\nq0 10 01 Right q1 trailing\n")
    assert definition.rules == (Rule("q0", "1", "0", Move.RIGHT, "q1"),)


@pytest.mark.parametrize(
    "contents",
    [
        "",
        "\n\n",
        "101\n",
        "101\nabc\n0 1 0 R 0\n",
        "101\n1_000\n",
        "101\n\u0663\n",
        "101\n" + "9" * 5000 + "\n",
    ],
)
def test_parse_txt_rejects_missing_or_bad_header(contents: str) -> None:
    with pytest.raises(MachineLoadError):
        parse_txt(contents)


# === Structured ===
def test_parse_json_reads_all_fields() -> None:
    data = {
        "tape": "_1011",
        "initialTapePosition": "-2",
        "rules": [
            {"state": "0", "read": "1", "write": "0", "move": "L", "nextState": "0"},
        ],
    }
    definition = parse_json(json.dumps(data))

    assert definition.tape == "_1011"
    assert definition.initial_tape_position == -2
    assert definition.rules == (Rule("0", "1", "0", Move.LEFT, "0"),)


def test_parse_json_defaults_tape_and_position() -> None:
    definition = parse_json('{"rules": []}')
    assert definition.tape == ""
    assert definition.initial_tape_position == 0


def test_parse_json_accepts_plain_integer_position() -> None:
    definition = parse_json('{"tape": "ab", "initialTapePosition": 1, "rules": []}')
    assert definition.initial_tape_position == 1


def test_parse_json_drops_malformed_rules() -> None:
    valid = [
        {"state": "0", "read": "1", "write": "0", "move": "R", "nextState": "0"},
        {"state": "0", "read": "0", "write": "1", "move": "L", "nextState": "0"},
    ]
    malformed = [
        {"state": "0", "read": "1", "write": "0", "move": "R"},
        {"state": "0", "read": "11", "write": "0", "move": "R", "nextState": "0"},
        {"state": "0", "read": "1", "write": "0", "move": "S", "nextState": "0"},
        {"state": 0, "read": "1", "write": "0", "move": "R", "nextState": "0"},
        "0 1 0 R 0",
    ]
    base = {"tape": "100", "initialTapePosition": "0"}

    clean = parse_json(json.dumps({**base, "rules": valid}))
    noisy = parse_json(json.dumps({**base, "rules": [valid[0], *malformed, valid[1]]}))

    assert noisy == clean
    assert TuringMachine(noisy).run() == TuringMachine(clean).run() == 3


@pytest.mark.parametrize(
    "contents",
    [
        "not json",
        "[]",
        '{"tape": "1"}',
        '{"tape": "1", "rules": {}}',
        '{"tape": 5, "rules": []}',
        '{"initialTapePosition": "x", "rules": []}',
        '{"initialTapePosition": true, "rules": []}',
        '{"initialTapePosition": "1_000", "rules": []}',
        '{"initialTapePosition": "\u0663", "rules": []}',
        '{"initialTapePosition": "' + "9" * 5000 + '", "rules": []}',
        '{"initialTapePosition": ' + "9" * 5000 + ', "rules": []}',
        '{"initialTapePosition": 9223372036854775808, "rules": []}',
        "[" * 100000 + "]" * 100000,
    ],
)
def test_parse_json_rejects_malformed_top_level(contents: str) -> None:
    with pytest.raises(MachineLoadError):
        parse_json(contents)


def test_empty_rules_machine_keeps_tape() -> None:
    definition = parse_json('{"tape": "A", "rules": []}')
    machine = TuringMachine(definition)
    assert machine.run() == 0
    assert machine.tape_text == "A"


# === Dispatch ===
def test_read_machine_dispatches_on_extension(tmp_path: Path) -> None:
    txt = tmp_path / "m.txt"
    txt.write_text("100\n0\n0 1 0 R 0\n0 0 1 L 0\n", encoding="utf-8")
    js = tmp_path / "m.json"
    js.write_text(
        json.dumps(
            {
                "tape": "100",
                "initialTapePosition": "0",
                "rules": [
                    {"state": "0", "read": "1", "write": "0", "move": "R", "nextState": "0"},
                    {"state": "0", "read": "0", "write": "1", "move": "L", "nextState": "0"},
                ],
            }
        ),
        encoding="utf-8",
    )

    assert read_machine(txt) == read_machine(str(js))


def test_read_machine_rejects_unsupported_extension(tmp_path: Path) -> None:
    for name in ("m.yaml", "machine", "m.TXT"):
        path = tmp_path / name
        path.write_text("100\n0\n", encoding="utf-8")
        with pytest.raises(MachineLoadError, match="Unsupported file extension"):
            read_machine(path)


def test_read_machine_reports_unreadable_file_before_extension(tmp_path: Path) -> None:
    with pytest.raises(MachineLoadError, match="reading file"):
        read_machine(tmp_path / "missing.xyz")
    with pytest.raises(MachineLoadError, match="reading file"):
        read_machine(tmp_path)


def test_bundled_sample_machines_load() -> None:
    increment = read_machine(REPO_ROOT / "machines" / "binary_increment.json")
    machine = TuringMachine(increment)
    assert machine.run() == 3
    assert machine.tape_text == "_1100"

    adder = TuringMachine(read_machine(REPO_ROOT / "machines" / "unary_add.txt"))
    assert adder.run() == 8
    assert adder.tape_text == "_11111__"
