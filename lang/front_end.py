"""
Scanner and parser: from source text to the list of top-level nodes the evaluator consumes.

The scanner is a booze-tools mini-scanner. The grammar is small enough that the
parser is plain recursive descent, one method per rule:

	program    := statement*
	statement  := LET name = expr | FN name ( names ) block | IF expr block
	            | IMPORT string AS name | ; | expr
	block      := { statement* }
	expr       := sum ( (== | !=) sum )*
	sum        := unary ( (+ | -) unary )*
	unary      := - unary | EXISTS unary | atom
	atom       := integer | real | string | TRUE | FALSE | NULL | ( expr )
	            | name ( args ) | name . name ( args ) | name . name | name

String literals keep their quotes; the evaluator strips them.
"""
from pathlib import Path
from typing import NamedTuple, Optional

from boozetools.scanning import miniscan
from boozetools.parsing.interface import ParseError
from . import syntax
from .ontology import Node
from .location import LineIndex
from .diagnostics import Report

class LangParseError(ParseError):
	""" Carries a message and the slice of text that provoked it. """
	def __init__(self, message:str, where:slice):
		super().__init__(message, where)
	@property
	def message(self) -> str: return self.args[0]
	@property
	def slice(self) -> slice: return self.args[1]

class Token(NamedTuple):
	kind: str
	text: str
	slice: slice

END = "<END>"

###############################################################################
#  Scanning

lexicon = miniscan.Definition()
lexicon.ignore(r"\s+")
lexicon.ignore(r"\/\/[^\n]*")

def _emit(yy, kind:str):
	yy.token(kind, Token(kind, yy.match(), yy.slice()))

@lexicon.on(r"[0-9]+")
def scan_integer(yy): _emit(yy, "integer")

@lexicon.on(r"[0-9]+\.[0-9]+")
def scan_real(yy): _emit(yy, "real")

@lexicon.on(r'["][^"]*["]')
def scan_string(yy): _emit(yy, "string")

@lexicon.on(r'["][^"]*')
def scan_unterminated_string(yy):
	raise LangParseError("This string never ends.", yy.slice())

@lexicon.on(r"[A-Za-z_][A-Za-z0-9_]*")
def scan_word(yy):
	word = yy.match()
	_emit(yy, word if word in syntax.RESERVED else "name")

def scan_punctuation(yy): _emit(yy, yy.match())

PUNCTUATION = ["==", "!=", "=", "+", "-", "(", ")", "{", "}", ",", ".", ";"]
for _glyph in PUNCTUATION:
	lexicon.on("".join("\\"+c for c in _glyph))(scan_punctuation)

# Declared last, so it only wins where no other rule matches.
@lexicon.on(r".")
def scan_stray(yy):
	raise LangParseError("I don't know what to make of %r." % yy.match(), yy.slice())

def scan(text:str) -> list[Token]:
	return [token for _kind, token in lexicon.scan(text)]

###############################################################################
#  Parsing

class Parser:
	def __init__(self, text:str):
		self._tokens = scan(text)
		self._index = LineIndex(text)
		self._end = Token(END, "", slice(len(text), len(text)))
		self._position = 0

	def peek(self) -> Token:
		if self._position < len(self._tokens): return self._tokens[self._position]
		else: return self._end

	def peek_kind(self) -> str: return self.peek().kind

	def advance(self) -> Token:
		token = self.peek()
		self._position += 1
		return token

	def accept(self, kind:str) -> Optional[Token]:
		if self.peek_kind() == kind: return self.advance()

	def expect(self, kind:str, what:str=None) -> Token:
		if self.peek_kind() == kind: return self.advance()
		self.unexpected(what or repr(kind))

	def unexpected(self, what:str):
		token = self.peek()
		found = "the end of the text" if token.kind == END else repr(token.text)
		raise LangParseError("Expected %s but found %s." % (what, found), token.slice)

	def line(self, token:Token) -> int:
		return self._index.line_of(token.slice.start)

	# Rules:

	def program(self) -> list[Node]:
		statements = []
		while self.peek_kind() != END:
			statements.append(self.statement())
		return statements

	def statement(self) -> Node:
		kind = self.peek_kind()
		if kind == "let": return self.let_declaration()
		if kind == "fn": return self.function()
		if kind == "if": return self.if_statement()
		if kind == "import": return self.import_statement()
		if kind == ";": return syntax.Semicolon(self.line(self.advance()))
		return self.expr()

	def let_declaration(self):
		line = self.line(self.advance())
		name = self.expect("name", "a name to declare").text
		self.expect("=")
		return syntax.LetDeclaration(name, self.expr(), line)

	def function(self):
		line = self.line(self.advance())
		name = self.expect("name", "the name of the function").text
		self.expect("(")
		params = []
		if self.peek_kind() != ")":
			params.append(self.expect("name", "a parameter name").text)
			while self.accept(","):
				params.append(self.expect("name", "a parameter name").text)
		self.expect(")")
		return syntax.Function(name, params, self.block(), line)

	def if_statement(self):
		line = self.line(self.advance())
		condition = self.expr()
		return syntax.IfStatement(condition, self.block(), line)

	def import_statement(self):
		line = self.line(self.advance())
		file = self.expect("string", "the quoted name of a file").text
		self.expect("as")
		alias = self.expect("name", "a name for the imported module").text
		return syntax.Import(file, alias, line)

	def block(self) -> list[Node]:
		self.expect("{")
		body = []
		while not self.accept("}"):
			if self.peek_kind() == END: self.unexpected("'}'")
			body.append(self.statement())
		return body

	def expr(self) -> Node:
		left = self.sum()
		while self.peek_kind() in ("==", "!="):
			op = self.advance()
			ctor = syntax.IsEqual if op.kind == "==" else syntax.IsUnequal
			left = ctor(left, self.sum(), self.line(op))
		return left

	def sum(self) -> Node:
		left = self.unary()
		while self.peek_kind() in ("+", "-"):
			op = self.advance()
			ctor = syntax.Addition if op.kind == "+" else syntax.Subtraction
			left = ctor(left, self.unary(), self.line(op))
		return left

	def unary(self) -> Node:
		if self.peek_kind() == "-":
			line = self.line(self.advance())
			return syntax.Subtraction(syntax.Null(line), self.unary(), line)
		if self.peek_kind() == "exists":
			line = self.line(self.advance())
			return syntax.Exists(self.unary(), line)
		return self.atom()

	def atom(self) -> Node:
		token = self.peek()
		line = self.line(token)
		kind = token.kind
		if kind == "integer": self.advance(); return syntax.Number(int(token.text), line)
		if kind == "real": self.advance(); return syntax.Float(float(token.text), line)
		if kind == "string": self.advance(); return syntax.String(token.text, line, quoted=True)
		if kind in ("true", "false"): self.advance(); return syntax.Boolean(kind == "true", line)
		if kind == "null": self.advance(); return syntax.Null(line)
		if kind == "(":
			self.advance()
			inside = self.expr()
			self.expect(")")
			return inside
		if kind == "name":
			self.advance()
			if self.peek_kind() == "(":
				return syntax.Call(token.text, self.arguments(), line)
			if self.accept("."):
				prop = self.expect("name", "a property name").text
				if self.peek_kind() == "(":
					return syntax.PropertyCall(token.text, prop, self.arguments(), line)
				return syntax.PropertyAccess(token.text, prop, line)
			return syntax.Identifier(token.text, line)
		self.unexpected("an expression")

	def arguments(self) -> list[Node]:
		self.expect("(")
		args = []
		if self.peek_kind() != ")":
			args.append(self.expr())
			while self.accept(","):
				args.append(self.expr())
		self.expect(")")
		return args

def parse(text:str) -> list[Node]:
	""" Raises LangParseError on the first thing that doesn't fit. """
	return Parser(text).program()

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[list[Node]]:
	""" Submit text to parser; on failure, tell the report and return None. """
	try:
		return parse(text)
	except LangParseError as ex:
		report.parse_error(path, text, ex.message, ex.slice)
