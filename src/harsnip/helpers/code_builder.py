"""Line accumulator used by renderers to assemble snippets."""

from __future__ import annotations

from collections.abc import Callable

PostProcessor = Callable[[str], str]


class CodeBuilder:
    """Collect indented lines and join them into a snippet.

    Args:
        indent: Indentation unit repeated once per indent level.
        join: String placed between lines.
    """

    def __init__(self, indent: str = "", join: str = "\n") -> None:
        self.indent = indent
        self.line_join = join
        self.code: list[str] = []
        self._post_processors: list[PostProcessor] = []

    def indent_line(self, line: str, indent_level: int = 0) -> str:
        return f"{self.indent * indent_level}{line}"

    def unshift(self, line: str, indent_level: int = 0) -> CodeBuilder:
        """Insert a line at the start of the snippet."""
        self.code.insert(0, self.indent_line(line, indent_level))
        return self

    def push(self, line: str, indent_level: int = 0) -> CodeBuilder:
        """Append a line to the end of the snippet."""
        self.code.append(self.indent_line(line, indent_level))
        return self

    def blank(self) -> CodeBuilder:
        """Append an empty line."""
        self.code.append("")
        return self

    def add_postprocessor(self, processor: PostProcessor) -> CodeBuilder:
        self._post_processors.append(processor)
        return self

    def join(self) -> str:
        """Return the assembled snippet after running post-processors."""
        result = self.line_join.join(self.code)
        for processor in self._post_processors:
            result = processor(result)
        return result
