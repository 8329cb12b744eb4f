import sys
from typing import Any, List, Optional

from .diagnostics import Diagnostics
from .lexer import scan
from .parser import parse
from .interpreter import Interpreter


class Lox:
    """
    Host for the scan -> parse -> interpret pipeline.
    A single Interpreter is kept so globals accumulate across REPL lines.
    """
    def __init__(self):
        self.diagnostics = Diagnostics()
        self.interpreter = Interpreter(self.diagnostics)

    @property
    def had_error(self) -> bool:
        return self.diagnostics.had_error

    @property
    def had_runtime_error(self) -> bool:
        return self.diagnostics.had_runtime_error

    def run(self, source: str) -> List[Any]:
        tokens = scan(source, self.diagnostics)
        statements = parse(tokens, self.diagnostics)

        # Stop if there was a syntax error.
        if self.diagnostics.had_error:
            return []

        return self.interpreter.interpret(statements)

    def run_file(self, path: str):
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
        self.run(source)

    def run_prompt(self):
        print("Lox REPL (Ctrl+C to exit)")
        while True:
            try:
                line = input("> ")
                if not line: continue
                self.run(line)
                self.diagnostics.reset()
            except KeyboardInterrupt:
                print("\nExiting.")
                break
            except EOFError:
                print("\nExiting.")
                break


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    lox = Lox()
    if len(args) > 1:
        print("Usage: lox [script]")
        return 64
    if len(args) == 1:
        try:
            lox.run_file(args[0])
        except FileNotFoundError:
            print(f"Error: file {args[0]} not found", file=sys.stderr)
            return 66
        if lox.had_error: return 65
        if lox.had_runtime_error: return 70
        return 0
    lox.run_prompt()
    return 0


if __name__ == "__main__":
    sys.exit(main())
