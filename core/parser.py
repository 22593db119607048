"""
G-code parser for creating command records from token streams.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
from core.lexer import GCodeLexer, Token, TokenType
from utils.errors import ErrorCollector, ErrorType

logger = logging.getLogger(__name__)


class Mnemonic(Enum):
    GENERAL = "G"
    MISCELLANEOUS = "M"
    PROGRAM_NUMBER = "O"
    TOOL_CHANGE = "T"


@dataclass(frozen=True)
class CommandRecord:
    """A single G-code instruction together with the words that follow it."""
    mnemonic: Mnemonic
    major_number: int
    minor_number: int = 0
    arguments: Mapping[str, float] = field(default_factory=dict)
    line_number: int = 0
    span: Tuple[int, int] = (0, 0)

    def __post_init__(self):
        normalized = {letter.lower(): float(value) for letter, value in self.arguments.items()}
        object.__setattr__(self, 'arguments', MappingProxyType(normalized))

    def value_for(self, letter: str) -> Optional[float]:
        """Get the value of a parameter word, or None if it was not given."""
        return self.arguments.get(letter.lower())

    def __str__(self):
        words = ' '.join(f"{k.upper()}{v:g}" for k, v in self.arguments.items())
        number = f"{self.major_number}.{self.minor_number}" if self.minor_number else str(self.major_number)
        return f"{self.mnemonic.value}{number} {words}".strip()


def parse_command_number(value: str) -> Tuple[int, int]:
    """Split "90.1" into (90, 1); leading zeros are dropped ("01" -> 1)."""
    sign = -1 if value.startswith('-') else 1
    whole, _, fraction = value.lstrip('+-').partition('.')
    major = sign * int(whole or '0')
    minor = int(fraction) if fraction.strip('0') else 0
    return major, minor


class GCodeParser:
    """Parses tokens into command records."""

    def __init__(self, error_collector: ErrorCollector):
        self.error_collector = error_collector

    def parse(self, tokens: List[Token]) -> List[CommandRecord]:
        """Parse tokens into command records, in source order."""
        records = []
        pending = None  # (command token, words dict, last char)

        for token in tokens:
            if token.type in (TokenType.NEWLINE, TokenType.EOF):
                if pending:
                    records.append(self._build_record(*pending))
                pending = None
                continue

            if token.type in (TokenType.COMMENT, TokenType.LINE_NUMBER):
                continue

            if token.type == TokenType.COMMAND:
                if pending:
                    records.append(self._build_record(*pending))
                pending = (token, {}, token.char_end)
                continue

            # Parameter word
            if pending is None:
                self.error_collector.add_warning(
                    token.line_number,
                    f"{token.letter}{token.value} has no command and was ignored",
                    ErrorType.SEMANTIC, token.char_start, token.char_end
                )
                continue

            command, words, _ = pending
            letter = token.letter.lower()
            if letter in words:
                self.error_collector.add_warning(
                    token.line_number,
                    f"Duplicate {token.letter} word, using the last value",
                    ErrorType.SEMANTIC, token.char_start, token.char_end
                )
            try:
                value = float(token.value)
            except ValueError as e:
                self.error_collector.add_error(
                    token.line_number, token.char_start, token.char_end,
                    str(e), ErrorType.SYNTAX
                )
            else:
                if math.isfinite(value):
                    words[letter] = value
                else:
                    self.error_collector.add_error(
                        token.line_number, token.char_start, token.char_end,
                        f"{token.letter} value out of range", ErrorType.SYNTAX
                    )
            pending = (command, words, token.char_end)

        logger.debug("Parsed %d command records", len(records))
        return records

    def _build_record(self, command: Token, words: Dict[str, float], char_end: int) -> CommandRecord:
        major, minor = parse_command_number(command.value)
        return CommandRecord(
            mnemonic=Mnemonic(command.letter),
            major_number=major,
            minor_number=minor,
            arguments=words,
            line_number=command.line_number,
            span=(command.char_start, char_end),
        )


def parse_gcode(gcode_text: str, error_collector: Optional[ErrorCollector] = None) -> List[CommandRecord]:
    """Tokenize and parse text in one step."""
    collector = error_collector if error_collector is not None else ErrorCollector()
    tokens = GCodeLexer(collector).tokenize(gcode_text)
    return GCodeParser(collector).parse(tokens)
