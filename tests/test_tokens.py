"""Test operator, punctuation, and tag tokens."""

from yodalint.tokens import TokenType

from tests.conftest import assert_types, assert_values, significant


class TestOpenTags:
    def test_bare_open_tag(self, lex):
        tokens = lex("<?php")
        assert_types(tokens, [TokenType.OPEN_TAG])

    def test_open_tag_case_insensitive(self, lex):
        tokens = lex("<?PHP $a")
        assert_types(tokens, [TokenType.OPEN_TAG, TokenType.WHITESPACE, TokenType.VARIABLE])

    def test_echo_tag(self, lex):
        tokens = lex("<?= $x ?>")
        assert_types(
            tokens,
            [
                TokenType.OPEN_TAG_WITH_ECHO,
                TokenType.WHITESPACE,
                TokenType.VARIABLE,
                TokenType.WHITESPACE,
                TokenType.CLOSE_TAG,
            ],
        )

    def test_inline_html_around_php(self, lex):
        tokens = lex("<p><?php echo 1; ?>\n</p>")
        assert tokens[0].type == TokenType.INLINE_HTML
        assert tokens[0].value == "<p>"
        assert tokens[1].type == TokenType.OPEN_TAG
        close = [t for t in tokens if t.type == TokenType.CLOSE_TAG]
        assert close[0].value == "?>\n"
        assert tokens[-1].type == TokenType.INLINE_HTML
        assert tokens[-1].value == "</p>"

    def test_xml_declaration_is_html(self, lex):
        tokens = lex('<?xml version="1.0"?>')
        assert_types(tokens, [TokenType.INLINE_HTML])

    def test_empty_source(self, lex):
        assert lex("") == []


class TestComparisonOperators:
    def test_equal(self, php_lex):
        assert_types(php_lex("=="), [TokenType.IS_EQUAL])

    def test_not_equal_forms(self, php_lex):
        tokens = significant(php_lex("!= <>"))
        assert_types(tokens, [TokenType.IS_NOT_EQUAL, TokenType.IS_NOT_EQUAL])

    def test_identical(self, php_lex):
        tokens = significant(php_lex("=== !=="))
        assert_types(tokens, [TokenType.IS_IDENTICAL, TokenType.IS_NOT_IDENTICAL])

    def test_spaceship_is_not_less_than(self, php_lex):
        assert_types(php_lex("<=>"), [TokenType.SPACESHIP])

    def test_ordering(self, php_lex):
        tokens = significant(php_lex("< > <= >="))
        assert_types(
            tokens,
            [
                TokenType.LESS_THAN,
                TokenType.GREATER_THAN,
                TokenType.IS_SMALLER_OR_EQUAL,
                TokenType.IS_GREATER_OR_EQUAL,
            ],
        )

    def test_assignment_is_not_comparison(self, php_lex):
        assert_types(php_lex("="), [TokenType.ASSIGN])


class TestBooleanOperators:
    def test_symbolic(self, php_lex):
        tokens = significant(php_lex("&& || !"))
        assert_types(
            tokens, [TokenType.BOOLEAN_AND, TokenType.BOOLEAN_OR, TokenType.BOOLEAN_NOT]
        )

    def test_word_forms(self, php_lex):
        tokens = significant(php_lex("and OR xor"))
        assert_types(
            tokens, [TokenType.LOGICAL_AND, TokenType.LOGICAL_OR, TokenType.LOGICAL_XOR]
        )


class TestMemberAccess:
    def test_double_colon(self, php_lex):
        tokens = php_lex("self::$foo")
        assert_types(tokens, [TokenType.SELF, TokenType.DOUBLE_COLON, TokenType.VARIABLE])

    def test_object_operator(self, php_lex):
        tokens = php_lex("$a->b")
        assert_types(
            tokens, [TokenType.VARIABLE, TokenType.OBJECT_OPERATOR, TokenType.IDENTIFIER]
        )

    def test_nullsafe_operator(self, php_lex):
        tokens = php_lex("$a?->b")
        assert tokens[1].type == TokenType.OBJECT_OPERATOR
        assert tokens[1].value == "?->"


class TestOtherOperators:
    def test_compound_assignments(self, php_lex):
        tokens = significant(php_lex(".= ??= **= <<="))
        assert {t.type for t in tokens} == {TokenType.COMPOUND_ASSIGN}
        assert_values(tokens, [".=", "??=", "**=", "<<="])

    def test_coalesce_and_ternary(self, php_lex):
        tokens = significant(php_lex("?? ? :"))
        assert_types(tokens, [TokenType.COALESCE, TokenType.INLINE_THEN, TokenType.COLON])

    def test_concat(self, php_lex):
        assert_types(php_lex("."), [TokenType.CONCAT])

    def test_ellipsis(self, php_lex):
        assert_types(php_lex("..."), [TokenType.ELLIPSIS])

    def test_increment(self, php_lex):
        tokens = php_lex("$i++")
        assert_types(tokens, [TokenType.VARIABLE, TokenType.INC_DEC])

    def test_namespace_separator(self, php_lex):
        tokens = php_lex("\\Foo\\bar")
        assert_types(
            tokens,
            [
                TokenType.NS_SEPARATOR,
                TokenType.IDENTIFIER,
                TokenType.NS_SEPARATOR,
                TokenType.IDENTIFIER,
            ],
        )


class TestPunctuation:
    def test_brackets(self, php_lex):
        tokens = php_lex("([{}])")
        assert_types(
            tokens,
            [
                TokenType.OPEN_PARENTHESIS,
                TokenType.OPEN_SQUARE_BRACKET,
                TokenType.OPEN_CURLY_BRACKET,
                TokenType.CLOSE_CURLY_BRACKET,
                TokenType.CLOSE_SQUARE_BRACKET,
                TokenType.CLOSE_PARENTHESIS,
            ],
        )

    def test_attribute_opener(self, php_lex):
        tokens = php_lex("#[Attr]")
        assert_types(
            tokens,
            [
                TokenType.OPEN_SQUARE_BRACKET,
                TokenType.IDENTIFIER,
                TokenType.CLOSE_SQUARE_BRACKET,
            ],
        )
        assert tokens[0].value == "#["

    def test_semicolon_and_comma(self, php_lex):
        assert_types(php_lex(";,"), [TokenType.SEMICOLON, TokenType.COMMA])


class TestPositions:
    def test_variable_on_second_line(self, lex):
        tokens = lex("<?php\n$a")
        var = tokens[-1]
        assert var.type == TokenType.VARIABLE
        assert var.span.start.line == 2
        assert var.span.start.column == 1
        assert var.span.end.column == 3

    def test_operator_column(self, lex):
        tokens = lex("<?php $a == 1;")
        op = [t for t in tokens if t.type == TokenType.IS_EQUAL][0]
        assert op.span.start.column == 10
        assert op.span.start.offset == 9
