"""
Test suite for the doscript lexer.

Tests cover:
- Punctuation and one/two-character operators
- Comments and whitespace
- String, number and identifier literals
- Keyword recognition
- Lexical errors and their offsets
"""

import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from doscript.lexer import Lexer, Token, TokenType, KEYWORDS, LexerError, tokenize_string, tokenize_file
from doscript.lexer.errors import (
    ERROR_CODES, create_invalid_character_error, create_unterminated_string_error,
    create_invalid_number_error, create_unexpected_eof_error
)


def kinds(source):
    return [token.kind for token in tokenize_string(source)]


class TestPunctuation(unittest.TestCase):
    """Single-character and one-or-two-character tokens."""

    def test_single_character_tokens(self):
        self.assertEqual(kinds("(),.-+;*|/"), [
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.COMMA,
            TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
            TokenType.STAR, TokenType.PIPE, TokenType.SLASH, TokenType.EOF,
        ])

    def test_one_or_two_character_operators(self):
        self.assertEqual(kinds("! != = == < <= > >="), [
            TokenType.BANG, TokenType.BANG_EQUAL,
            TokenType.EQUAL, TokenType.EQUAL_EQUAL,
            TokenType.LESS, TokenType.LESS_EQUAL,
            TokenType.GREATER, TokenType.GREATER_EQUAL,
            TokenType.EOF,
        ])

    def test_two_character_token_spans(self):
        tokens = tokenize_string("a<=b")
        self.assertEqual(tokens[1], Token(TokenType.LESS_EQUAL, 1, 2))
        self.assertEqual(tokens[2], Token(TokenType.IDENTIFIER, 3, 1))

    def test_operator_at_end_of_source(self):
        """A lone operator as the last character is complete, not an error."""
        self.assertEqual(kinds("!"), [TokenType.BANG, TokenType.EOF])
        self.assertEqual(kinds("a ="), [TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.EOF])
        self.assertEqual(kinds("1 /"), [TokenType.NUMBER, TokenType.SLASH, TokenType.EOF])

    def test_double_equals_sequence(self):
        self.assertEqual(kinds("==="), [TokenType.EQUAL_EQUAL, TokenType.EQUAL, TokenType.EOF])


class TestCommentsAndWhitespace(unittest.TestCase):

    def test_comment_produces_no_token(self):
        tokens = tokenize_string("1 // ignored\n2")
        self.assertEqual([t.kind for t in tokens], [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF])
        self.assertEqual(tokens[0].start, 0)
        self.assertEqual(tokens[1].start, 13)

    def test_comment_at_end_of_source(self):
        self.assertEqual(kinds("1 // trailing"), [TokenType.NUMBER, TokenType.EOF])

    def test_slash_is_division(self):
        self.assertEqual(kinds("a / b"), [
            TokenType.IDENTIFIER, TokenType.SLASH, TokenType.IDENTIFIER, TokenType.EOF
        ])

    def test_whitespace_only(self):
        self.assertEqual(tokenize_string(" \t\r\n "), [Token(TokenType.EOF, 5, 0)])

    def test_empty_source(self):
        self.assertEqual(tokenize_string(""), [Token(TokenType.EOF, 0, 0)])


class TestLiterals(unittest.TestCase):

    def test_string_spans_both_quotes(self):
        source = 'x "abc" y'
        tokens = tokenize_string(source)
        self.assertEqual(tokens[1], Token(TokenType.STRING, 2, 5))
        self.assertEqual(tokens[1].lexeme(source), '"abc"')

    def test_string_has_no_escapes(self):
        source = r'"a\" b'
        tokens = tokenize_string(source)
        self.assertEqual(tokens[0].lexeme(source), r'"a\"')
        self.assertEqual(tokens[1].kind, TokenType.IDENTIFIER)

    def test_string_may_span_lines(self):
        source = '"one\ntwo"'
        tokens = tokenize_string(source)
        self.assertEqual(tokens[0], Token(TokenType.STRING, 0, len(source)))

    def test_empty_string(self):
        self.assertEqual(tokenize_string('""')[0], Token(TokenType.STRING, 0, 2))

    def test_integer(self):
        self.assertEqual(tokenize_string("12345")[0], Token(TokenType.NUMBER, 0, 5))

    def test_decimal(self):
        source = "3.14"
        token = tokenize_string(source)[0]
        self.assertEqual(token.kind, TokenType.NUMBER)
        self.assertEqual(token.lexeme(source), "3.14")

    def test_number_followed_by_dot_and_number(self):
        source = "1.5.2"
        tokens = tokenize_string(source)
        self.assertEqual([t.lexeme(source) for t in tokens[:-1]], ["1.5", ".", "2"])

    def test_identifier_stops_at_digit(self):
        self.assertEqual(tokenize_string("abc1"), [
            Token(TokenType.IDENTIFIER, 0, 3),
            Token(TokenType.NUMBER, 3, 1),
            Token(TokenType.EOF, 4, 0),
        ])

    def test_mixed_case_identifier(self):
        source = "fooBar"
        token = tokenize_string(source)[0]
        self.assertEqual(token.kind, TokenType.IDENTIFIER)
        self.assertEqual(token.lexeme(source), "fooBar")


class TestKeywords(unittest.TestCase):

    def test_every_keyword(self):
        for word, token_type in KEYWORDS.items():
            with self.subTest(word=word):
                self.assertEqual(tokenize_string(word)[0], Token(token_type, 0, len(word)))

    def test_keywords_are_case_sensitive(self):
        self.assertEqual(kinds("Let IF Do"), [TokenType.IDENTIFIER] * 3 + [TokenType.EOF])

    def test_keyword_prefix_is_identifier(self):
        self.assertEqual(kinds("letter ends iffy"), [TokenType.IDENTIFIER] * 3 + [TokenType.EOF])

    def test_reserved_words_are_keywords(self):
        tokens = tokenize_string("while class")
        self.assertEqual(tokens[0].kind, TokenType.WHILE)
        self.assertEqual(tokens[1].kind, TokenType.CLASS)
        self.assertTrue(tokens[0].is_keyword)


class TestTokenSequence(unittest.TestCase):

    SOURCE = """
    let add = fn |a, b| a + b end
    // comment
    if add(1, 2.5) >= 3 then "yes" else "no" end
    """

    def test_eof_is_last_and_empty(self):
        tokens = tokenize_string(self.SOURCE)
        self.assertEqual(tokens[-1], Token(TokenType.EOF, len(self.SOURCE), 0))
        self.assertEqual([t.kind for t in tokens].count(TokenType.EOF), 1)

    def test_offsets_increase_without_overlap(self):
        tokens = tokenize_string(self.SOURCE)
        for previous, current in zip(tokens, tokens[1:]):
            self.assertLessEqual(previous.end, current.start)
            self.assertLess(previous.start, current.start)

    def test_scanning_is_deterministic(self):
        self.assertEqual(tokenize_string(self.SOURCE), tokenize_string(self.SOURCE))

    def test_lexer_can_be_rerun(self):
        lexer = Lexer(self.SOURCE)
        self.assertEqual(lexer.tokenize(), lexer.tokenize())

    def test_tokenize_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".do", delete=False, encoding="utf-8") as f:
            f.write(self.SOURCE)
            path = f.name
        try:
            self.assertEqual(tokenize_file(path), tokenize_string(self.SOURCE))
        finally:
            os.unlink(path)


class TestByteOffsets(unittest.TestCase):
    """Offsets and lengths count bytes of the UTF-8 encoded source."""

    def test_multibyte_string_shifts_later_offsets(self):
        source = '"é" 1'
        tokens = tokenize_string(source)
        self.assertEqual(tokens[0], Token(TokenType.STRING, 0, 4))
        self.assertEqual(tokens[1], Token(TokenType.NUMBER, 5, 1))
        self.assertEqual(tokens[-1], Token(TokenType.EOF, 6, 0))

    def test_lexeme_of_multibyte_string(self):
        source = 'x "naïve" y'
        tokens = tokenize_string(source)
        self.assertEqual(tokens[1].lexeme(source), '"naïve"')
        self.assertEqual(tokens[2].lexeme(source), "y")

    def test_multibyte_comment(self):
        source = "// café\nx"
        self.assertEqual(tokenize_string(source)[0], Token(TokenType.IDENTIFIER, 9, 1))

    def test_bytes_and_text_sources_agree(self):
        source = 'let s = "日本" s'
        self.assertEqual(tokenize_string(source.encode("utf-8")), tokenize_string(source))
        tokens = tokenize_string(source)
        self.assertEqual(tokens[-2].lexeme(source.encode("utf-8")), "s")


class TestLexerErrors(unittest.TestCase):

    def assertLexerError(self, source, code, offset):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string(source)
        self.assertEqual(ctx.exception.code, code)
        self.assertEqual(ctx.exception.offset, offset)
        return ctx.exception

    def test_unterminated_string(self):
        error = self.assertLexerError('"abc', "L002", 0)
        self.assertIn("Unterminated string", str(error))

    def test_unterminated_string_after_tokens(self):
        self.assertLexerError('let s = "abc', "L002", 8)

    def test_missing_digit_after_decimal_point(self):
        self.assertLexerError("1.", "L003", 0)
        self.assertLexerError("x 12.y", "L003", 2)

    def test_unrecognized_character(self):
        self.assertLexerError("a @ b", "L001", 2)

    def test_underscore_is_not_an_identifier_character(self):
        self.assertLexerError("foo_bar", "L001", 3)

    def test_non_ascii_letter(self):
        error = self.assertLexerError("café", "L001", 3)
        self.assertEqual(error.message, "Unrecognized character: 'é'")

    def test_offset_after_multibyte_text(self):
        self.assertLexerError('"ü" @', "L001", 5)

    def test_messages_come_from_error_code_table(self):
        errors = [
            create_invalid_character_error("@", 0),
            create_unterminated_string_error(0),
            create_invalid_number_error("1.", 0),
            create_unexpected_eof_error(0),
        ]
        self.assertEqual([e.code for e in errors], sorted(ERROR_CODES))
        for error in errors:
            self.assertTrue(error.message.startswith(ERROR_CODES[error.code]))

    def test_advancing_past_end_is_an_error(self):
        lexer = Lexer("")
        with self.assertRaises(LexerError) as ctx:
            lexer._advance()
        self.assertEqual(ctx.exception.code, "L004")

    def test_reading_past_end_is_an_error(self):
        lexer = Lexer("x")
        lexer.current = 1
        with self.assertRaises(LexerError) as ctx:
            lexer._current_char()
        self.assertEqual(ctx.exception.code, "L004")

    def test_diagnostic_format(self):
        with self.assertRaises(LexerError) as ctx:
            Lexer("1 ?", filename="main.do").tokenize()
        text = str(ctx.exception)
        self.assertTrue(text.startswith("ERROR[L001]: Unrecognized character"))
        self.assertIn("--> main.do@2", text)


if __name__ == '__main__':
    unittest.main()
