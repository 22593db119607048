"""
G-code lexer for tokenizing raw G-code text.
"""
import re
from enum import Enum
from dataclasses import dataclass
from typing import List, Optional
from utils.errors import ErrorCollector, ErrorType


class TokenType(Enum):
    COMMAND = "COMMAND"          # G, M, O, T
    LINE_NUMBER = "LINE_NUMBER"  # N
    WORD = "WORD"                # axis and parameter words
    COMMENT = "COMMENT"
    NEWLINE = "NEWLINE"
    EOF = "EOF"


COMMAND_LETTERS = frozenset('GMOT')
PARAMETER_LETTERS = frozenset('XYZABCUVWEIJKRFSPQLHD')


@dataclass
class Token:
    """Represents a single token in G-code."""
    type: TokenType
    letter: str
    value: str
    line_number: int
    char_start: int
    char_end: int

    def __str__(self):
        return f"{self.type.value}:{self.letter}{self.value}"


class GCodeLexer:
    """Tokenizes G-code text into a stream of tokens."""

    # No exponent notation: E is an extrusion word, so "X1E5" is two words.
    WORD_PATTERN = re.compile(r'([A-Z])([+-]?(?:\d+\.?\d*|\.\d+))', re.IGNORECASE)

    PAREN_COMMENT_PATTERN = re.compile(r'\(([^)]*)\)')
    SEMICOLON_COMMENT_PATTERN = re.compile(r';(.*)$')

    def __init__(self, error_collector: ErrorCollector):
        self.error_collector = error_collector

    def tokenize(self, gcode_text: str) -> List[Token]:
        """Tokenize the entire G-code text."""
        tokens = []
        lines = gcode_text.split('\n')

        for line_num, line in enumerate(lines, 1):
            tokens.extend(self._tokenize_line(line.rstrip('\r'), line_num))
            tokens.append(Token(TokenType.NEWLINE, '', '\n', line_num, len(line), len(line)))

        tokens.append(Token(TokenType.EOF, '', '', len(lines), 0, 0))
        return tokens

    def _tokenize_line(self, line: str, line_number: int) -> List[Token]:
        """Tokenize a single line of G-code."""
        tokens = []
        pos = 0

        while pos < len(line):
            char = line[pos]
            if char.isspace():
                pos += 1
                continue

            # Block delete and program delimiters carry no motion
            if char in '%/':
                pos += 1
                continue

            if char == ';':
                match = self.SEMICOLON_COMMENT_PATTERN.match(line, pos)
                tokens.append(Token(TokenType.COMMENT, ';', match.group(1),
                                    line_number, pos, len(line)))
                break

            if char == '(':
                comment_token = self._parse_paren_comment(line, pos, line_number)
                tokens.append(comment_token)
                pos = comment_token.char_end
                continue

            word_match = self.WORD_PATTERN.match(line, pos)
            if word_match:
                letter = word_match.group(1).upper()
                token_type = self._get_token_type_for_letter(letter)
                if token_type:
                    tokens.append(Token(token_type, letter, word_match.group(2),
                                        line_number, pos, word_match.end()))
                else:
                    self.error_collector.add_error(
                        line_number, pos, word_match.end(),
                        f"Unknown G-code letter: {letter}",
                        ErrorType.SYNTAX
                    )
                pos = word_match.end()
                continue

            self.error_collector.add_error(
                line_number, pos, pos + 1,
                f"Unrecognized character: '{char}'",
                ErrorType.SYNTAX
            )
            pos += 1

        return tokens

    def _parse_paren_comment(self, line: str, pos: int, line_number: int) -> Token:
        paren_match = self.PAREN_COMMENT_PATTERN.match(line, pos)
        if paren_match:
            return Token(TokenType.COMMENT, '(', paren_match.group(1),
                         line_number, pos, paren_match.end())

        self.error_collector.add_error(
            line_number, pos, len(line),
            "Unclosed parenthesis in comment",
            ErrorType.SYNTAX
        )
        return Token(TokenType.COMMENT, '(', line[pos + 1:], line_number, pos, len(line))

    def _get_token_type_for_letter(self, letter: str) -> Optional[TokenType]:
        if letter in COMMAND_LETTERS:
            return TokenType.COMMAND
        if letter == 'N':
            return TokenType.LINE_NUMBER
        if letter in PARAMETER_LETTERS:
            return TokenType.WORD
        return None
