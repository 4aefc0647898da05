import io

import pytest

from zpl_interpreter import Lexer, ParsedCommand, Parser, Stream, parse_command


@pytest.mark.parametrize(
    "token, expected",
    [
        ("^XA", ParsedCommand("XA", [])),
        ("^FO50,60", ParsedCommand("FO", ["50", "60"])),
        ("^fo50,60", ParsedCommand("FO", ["50", "60"])),
        ("^BCN,60,,,,A", ParsedCommand("BC", ["N", "60", "", "", "", "A"])),
        ("^FD1234,ABC", ParsedCommand("FD", ["1234", "ABC"])),
        ("~SD15", ParsedCommand("SD", ["15"], "~")),
        # coded font: the font designation moves into the arguments
        ("^A0,40", ParsedCommand("A", ["0", "40"])),
        ("^A0N,40,30", ParsedCommand("A", ["0N", "40", "30"])),
        ("^AD", ParsedCommand("A", ["D"])),
        ("^A", ParsedCommand("A", [])),
        # named font keeps its own identifier and no font slot
        ("^A@N,40,30,E:ARIAL.TTF", ParsedCommand("A@", ["N", "40", "30", "E:ARIAL.TTF"])),
        ("^A@", ParsedCommand("A@", [])),
    ],
)
def test_parse_command(token, expected):
    assert parse_command(token) == expected


def test_empty_argument_text_is_an_empty_list():
    assert parse_command("^FS").args == []
    assert parse_command("^FD").args == []


def test_parse_document(sample_label):
    parser = Parser(Lexer(Stream(io.BytesIO(sample_label.encode()))))
    commands = parser.parse()

    assert [c.name for c in commands] == [
        "XA", "FO", "A", "FD", "FS", "FO", "BY", "BC", "FD", "FS", "FO", "GB", "FS", "XZ",
    ]
    assert commands[2].args == ["0", "40"]
    assert commands[3].args == ["World's Best Griddle"]
    assert parser.parse() == commands
