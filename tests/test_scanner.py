import pytest

from loxvm.scanner import Scanner, Token, TokenType, tokenize


def types(source):
    return [t.type for t in tokenize(source)]


def test_single_character_tokens():
    assert types("(){};,.-+*") == [
        TokenType.LEFT_PAREN,
        TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE,
        TokenType.SEMICOLON,
        TokenType.COMMA,
        TokenType.DOT,
        TokenType.MINUS,
        TokenType.PLUS,
        TokenType.STAR,
        TokenType.EOF,
    ]


def test_one_or_two_character_tokens():
    assert types("! != = == < <= > >=") == [
        TokenType.BANG,
        TokenType.BANG_EQUAL,
        TokenType.EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


@pytest.mark.parametrize(
    "word, kind",
    [
        ("and", TokenType.AND),
        ("class", TokenType.CLASS),
        ("else", TokenType.ELSE),
        ("false", TokenType.FALSE),
        ("for", TokenType.FOR),
        ("fun", TokenType.FUN),
        ("if", TokenType.IF),
        ("nil", TokenType.NIL),
        ("or", TokenType.OR),
        ("print", TokenType.PRINT),
        ("return", TokenType.RETURN),
        ("super", TokenType.SUPER),
        ("this", TokenType.THIS),
        ("true", TokenType.TRUE),
        ("var", TokenType.VAR),
        ("while", TokenType.WHILE),
    ],
)
def test_keywords(word, kind):
    first = tokenize(word)[0]
    assert first.type is kind
    assert first.lexeme == word


@pytest.mark.parametrize("word", ["andy", "f", "fo", "t", "th", "_x1", "Class", "whiles"])
def test_identifiers(word):
    tokens = tokenize(word)
    assert tokens[0] == Token(TokenType.IDENTIFIER, word, 1)
    assert tokens[1].type is TokenType.EOF


def test_number_with_fraction():
    first = tokenize("123.45")[0]
    assert first.type is TokenType.NUMBER
    assert first.lexeme == "123.45"


def test_trailing_dot_is_not_part_of_number():
    tokens = tokenize("1.")
    assert [(t.type, t.lexeme) for t in tokens[:2]] == [
        (TokenType.NUMBER, "1"),
        (TokenType.DOT, "."),
    ]


def test_string_lexeme_keeps_quotes():
    first = tokenize('"hi there"')[0]
    assert first.type is TokenType.STRING
    assert first.lexeme == '"hi there"'


def test_unterminated_string_is_error():
    tokens = tokenize('"abc')
    assert tokens[0].type is TokenType.ERROR
    assert tokens[0].lexeme == "Unterminated string."
    assert tokens[1].type is TokenType.EOF


def test_unexpected_character_is_error_and_scanning_continues():
    tokens = tokenize("@ 1")
    assert tokens[0] == Token(TokenType.ERROR, "Unexpected character.", 1)
    assert tokens[1].type is TokenType.NUMBER


def test_newlines_advance_line():
    tokens = tokenize("1\n2")
    assert tokens[1].line == tokens[0].line + 1


def test_multiline_string_line_is_line_at_close():
    tokens = tokenize('"a\nb" x')
    assert tokens[1].line == tokens[0].line
    assert tokens[0].line == 1 + 1


def test_slash_starts_comment_to_end_of_line():
    assert types("1 / 2") == [TokenType.NUMBER, TokenType.EOF]
    tokens = tokenize("// note\n3")
    assert tokens[0].type is TokenType.NUMBER
    assert tokens[0].lexeme == "3"


def test_whitespace_only_is_eof():
    assert types(" \t\r\n") == [TokenType.EOF]


def test_eof_is_repeated_after_end():
    scanner = Scanner("x")
    assert scanner.scan_token().type is TokenType.IDENTIFIER
    assert scanner.scan_token().type is TokenType.EOF
    assert scanner.scan_token().type is TokenType.EOF


def test_iteration_yields_single_eof_last():
    tokens = list(Scanner("1 + 2"))
    assert [t.type for t in tokens].count(TokenType.EOF) == 1
    assert tokens[-1].type is TokenType.EOF
    assert [t.lexeme for t in tokens[:-1]] == ["1", "+", "2"]