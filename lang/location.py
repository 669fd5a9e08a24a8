"""
A simple, light-weight way to get from character offsets to line numbers and back.
The parser tags each node with the line of its first token; diagnostics go the other way.
"""
from bisect import bisect_right

class LineIndex:
	def __init__(self, text:str):
		self._starts = [0]
		for i, c in enumerate(text):
			if c == "\n": self._starts.append(i+1)

	def line_of(self, offset:int) -> int:
		""" 1-based, as people count lines. """
		return bisect_right(self._starts, offset)

	def start_of(self, line:int) -> int:
		line = max(1, min(line, len(self._starts)))
		return self._starts[line-1]
