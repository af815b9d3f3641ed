import unittest

from silly.lang.error import SillySyntaxError, UnexpectedEndOfInput
from silly.lang.lexical import (Assignment, CallExpr, Compound, Expression, FunctionDecl, If, ListExpr, Print, Repeat,
                                Return, SimpleExpr, While, parse_statement)
from silly.lang.tokens import Token, TokenStream


def parse_expr(source):
    return Expression.parse(TokenStream(source))


def parse(source):
    return parse_statement(TokenStream(source))


class ExpressionTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "x": SimpleExpr(Token("x")),
            "'c'": SimpleExpr(Token("'c'")),
            "[]": ListExpr(()),
            "[1 x]": ListExpr((SimpleExpr(Token("1")), SimpleExpr(Token("x")))),
            "(+ 1 2)": CallExpr(Token("+"), (SimpleExpr(Token("1")), SimpleExpr(Token("2")))),
            "(f)": CallExpr(Token("f"), ()),
            "(len [(get x 0)])": CallExpr(Token("len"), (
                ListExpr((CallExpr(Token("get"), (SimpleExpr(Token("x")), SimpleExpr(Token("0"))),),)),
            )),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_expr(case), case)

    def test_syntax_errors(self):
        should_raise = ["(1 2)", "(print x)", "(( + 1 2))", ")", "{", "print", "@", "\"open", "'ab'", "(= x)"]
        for case in should_raise:
            self.assertRaises(SillySyntaxError, parse_expr, case)

    def test_unterminated(self):
        should_raise = ["(+ 1 2", "[1 2", "(", "["]
        for case in should_raise:
            self.assertRaises(UnexpectedEndOfInput, parse_expr, case)

    def test_consumes_exactly_one_expression(self):
        tokens = TokenStream("(+ 1 2) rest")
        Expression.parse(tokens)
        self.assertEqual(Token("rest"), tokens.next())

    def test_render(self):
        cases = ["x", "[1 2 [3]]", "(+ 1 (* 2 3))", "(f)", "[]", "(cat \"ab\" \"cd\")"]
        for case in cases:
            self.assertEqual(case, parse_expr(case).render(), case)


class StatementTestCase(unittest.TestCase):

    def test_selection(self):
        cases = {
            "x = 1": Assignment,
            "print x": Print,
            "if true { } else { }": If,
            "while false { }": While,
            "repeat 3 { }": Repeat,
            "{ x = 1 }": Compound,
            "func f() { }": FunctionDecl,
            "return 1": Return,
        }
        for case, expected in cases.items():
            self.assertIsInstance(parse(case), expected, case)

    def test_syntax_errors(self):
        should_raise = [
            "1 = x",             # illegal lhs
            "= 3",               # unknown statement
            "x 3",               # missing =
            "x == 3",            # == is not =
            "if true { }",       # else is mandatory
            "if true { } elif { }",
            "if true x = 1 else { }",
            "while true print x",
            "func 3() { }",      # name must be identifier
            "func f(1) { }",     # params must be identifiers
            "func f { }",
            "print )",
            "(+ 1 2)",           # expressions are not statements
        ]
        for case in should_raise:
            self.assertRaises(SillySyntaxError, parse, case)

    def test_function_decl(self):
        decl = parse("func add(a b) { return (+ a b) }")
        self.assertEqual(Token("add"), decl.name)
        self.assertEqual((Token("a"), Token("b")), decl.params)
        self.assertEqual(1, len(decl.body.statements))
        self.assertIsInstance(decl.body.statements[0], Return)

    def test_if(self):
        stmt = parse("if (< x 1) { print 1 } else { print 2 x = 3 }")
        self.assertEqual(1, len(stmt.then_block.statements))
        self.assertEqual(2, len(stmt.else_block.statements))

    def test_statements_in_sequence(self):
        tokens = TokenStream("x = 1 print x\n{ y = 2 }")
        stmts = []
        while tokens.has_next():
            stmts.append(parse_statement(tokens))
        self.assertEqual([Assignment, Print, Compound], [type(stmt) for stmt in stmts])

    def test_render(self):
        cases = {
            "x   =   (+ 1 2)": "x = (+ 1 2)",
            "print [1 'a']": "print [1 'a']",
            "return x": "return x",
            "{ }": "{ }",
            "{ x = 1 print x }": "{\n  x = 1\n  print x\n}",
            "repeat 2 { print 1 }": "repeat 2 {\n  print 1\n}",
            "while b { }": "while b { }",
            "func f(a b) { }": "func f(a b) { }",
            "if b { } else { print 0 }": "if b { }\nelse {\n  print 0\n}",
            "{ { x = 1 } }": "{\n  {\n    x = 1\n  }\n}",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)


if __name__ == '__main__':
    unittest.main()
