"""Syntax trees for the SILLY language, built by recursive descent straight from a TokenStream. Each node class
consumes exactly the tokens of its construct in parse and raises a SillySyntaxError as soon as the grammar is
violated; there is no recovery. Nodes are immutable and are reused as-is for execution (see runtime.py).

The grammar can be loosely defined as follows:

```
<statement>  ::= <print> | <if> | <while> | <repeat> | <compound> | <func> | <return> | <assign>
<compound>   ::= "{" <statement>* "}"
<if>         ::= "if" <expr> <compound> "else" <compound>   ; else branch is mandatory
<while>      ::= "while" <expr> <compound>
<repeat>     ::= "repeat" <expr> <compound>
<func>       ::= "func" <identifier> "(" <identifier>* ")" <compound>
<return>     ::= "return" <expr>
<assign>     ::= <identifier> "=" <expr>
<print>      ::= "print" <expr>

<expr>       ::= <literal> | <identifier>
               | "[" <expr>* "]"                            ; list
               | "(" <head> <expr>* ")"                     ; operator or user function call
<head>       ::= <identifier> | <math_op> | <bool_op> | <seq_op>
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from silly.lang.error import SillySyntaxError
from silly.lang.tokens import Category


def expect(tokens, spelling, construct):
    """Consumes the next token, which must be spelled spelling."""
    token = tokens.next()
    if token.spelling != spelling:
        raise SillySyntaxError("malformed {} (expected '{}', found '{}')", (construct, spelling, token))
    return token


def expect_identifier(tokens, role):
    token = tokens.next()
    if token.category is not Category.IDENTIFIER:
        raise SillySyntaxError("{} must be an identifier, found '{}' ({})", (role, token, token.category.value))
    return token


def indent(text):
    return "\n".join("  " + line for line in text.split("\n"))


class Expression(ABC):
    """Superclass of expression nodes: simple, list, or call."""

    @classmethod
    def parse(cls, tokens):
        """Reads one expression of whatever form the next token starts."""
        first = tokens.lookahead()
        if first.spelling == "(":
            return CallExpr.parse(tokens)
        elif first.spelling == "[":
            return ListExpr.parse(tokens)
        elif first.is_literal:
            return SimpleExpr.parse(tokens)
        raise SillySyntaxError("unknown value '{}'", first)

    @abstractmethod
    def render(self):
        """Source-like rendering of this node."""

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class SimpleExpr(Expression):
    """A single literal or identifier."""
    token: object

    @classmethod
    def parse(cls, tokens):
        token = tokens.next()
        if not token.is_literal:
            raise SillySyntaxError("unknown value '{}'", token)
        return cls(token)

    def render(self):
        return self.token.spelling


@dataclass(frozen=True)
class ListExpr(Expression):
    items: tuple = ()

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "[", "list")
        items = []
        while tokens.lookahead().spelling != "]":
            items.append(Expression.parse(tokens))
        tokens.next()
        return cls(tuple(items))

    def render(self):
        return "[" + " ".join(item.render() for item in self.items) + "]"


@dataclass(frozen=True)
class CallExpr(Expression):
    """Built-in operator or user function applied to arguments."""
    HEADS = (Category.IDENTIFIER, Category.MATH_FUNC, Category.BOOL_FUNC, Category.SEQ_FUNC)

    head: object
    args: tuple = ()

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "(", "expression")
        if tokens.lookahead().category not in CallExpr.HEADS:
            raise SillySyntaxError("identifier or function expected in expression, found '{}'", tokens.lookahead())

        head = tokens.next()
        args = []
        while tokens.lookahead().spelling != ")":
            args.append(Expression.parse(tokens))
        tokens.next()
        return cls(head, tuple(args))

    def render(self):
        return "(" + " ".join([self.head.spelling] + [arg.render() for arg in self.args]) + ")"


class Statement(ABC):
    """Superclass of statement nodes."""

    @classmethod
    def parse(cls, tokens):
        """Selects the statement form by looking at the next token and reads it."""
        first = tokens.lookahead()
        keyword_forms = {
            "print": Print,
            "if": If,
            "while": While,
            "repeat": Repeat,
            "{": Compound,
            "func": FunctionDecl,
            "return": Return,
        }
        if first.spelling in keyword_forms:
            return keyword_forms[first.spelling].parse(tokens)
        elif first.category is Category.IDENTIFIER:
            return Assignment.parse(tokens)
        raise SillySyntaxError("unknown statement type '{}'", first)

    @abstractmethod
    def render(self):
        """Source-like rendering of this node."""

    def __str__(self):
        return self.render()


def parse_statement(tokens):
    """Reads exactly one top-level statement from tokens."""
    return Statement.parse(tokens)


@dataclass(frozen=True)
class Assignment(Statement):
    target: object
    value: Expression

    @classmethod
    def parse(cls, tokens):
        target = tokens.next()
        if target.category is not Category.IDENTIFIER:
            raise SillySyntaxError("illegal lhs of assignment statement '{}'", target)
        expect(tokens, "=", "assignment statement")
        return cls(target, Expression.parse(tokens))

    def render(self):
        return f"{self.target} = {self.value}"


@dataclass(frozen=True)
class Compound(Statement):
    statements: tuple = ()

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "{", "compound statement")
        statements = []
        while tokens.lookahead().spelling != "}":
            statements.append(Statement.parse(tokens))
        tokens.next()
        return cls(tuple(statements))

    def render(self):
        if not self.statements:
            return "{ }"
        return "{\n" + "".join(indent(stmt.render()) + "\n" for stmt in self.statements) + "}"


@dataclass(frozen=True)
class If(Statement):
    condition: Expression
    then_block: Compound
    else_block: Compound

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "if", "if statement")
        condition = Expression.parse(tokens)
        then_block = Compound.parse(tokens)
        expect(tokens, "else", "if statement")
        return cls(condition, then_block, Compound.parse(tokens))

    def render(self):
        return f"if {self.condition} {self.then_block}\nelse {self.else_block}"


@dataclass(frozen=True)
class While(Statement):
    condition: Expression
    body: Compound

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "while", "while statement")
        return cls(Expression.parse(tokens), Compound.parse(tokens))

    def render(self):
        return f"while {self.condition} {self.body}"


@dataclass(frozen=True)
class Repeat(Statement):
    count: Expression
    body: Compound

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "repeat", "repeat statement")
        return cls(Expression.parse(tokens), Compound.parse(tokens))

    def render(self):
        return f"repeat {self.count} {self.body}"


@dataclass(frozen=True)
class FunctionDecl(Statement):
    name: object
    params: tuple
    body: Compound

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "func", "function declaration")
        name = expect_identifier(tokens, "function name")
        expect(tokens, "(", "function declaration")

        params = []
        while tokens.lookahead().spelling != ")":
            params.append(expect_identifier(tokens, "function parameter"))
        tokens.next()
        return cls(name, tuple(params), Compound.parse(tokens))

    def render(self):
        params = " ".join(param.spelling for param in self.params)
        return f"func {self.name}({params}) {self.body}"


@dataclass(frozen=True)
class Return(Statement):
    value: Expression

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "return", "return statement")
        return cls(Expression.parse(tokens))

    def render(self):
        return f"return {self.value}"


@dataclass(frozen=True)
class Print(Statement):
    value: Expression

    @classmethod
    def parse(cls, tokens):
        expect(tokens, "print", "print statement")
        return cls(Expression.parse(tokens))

    def render(self):
        return f"print {self.value}"
