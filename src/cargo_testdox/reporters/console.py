from typing import Optional
import typer
from ..parsing.classifier import Status, TestResult

GLYPHS = {
    Status.PASSED: ("✔", typer.colors.BRIGHT_GREEN),
    Status.FAILED: ("x", typer.colors.BRIGHT_RED),
    Status.IGNORED: ("?", typer.colors.BRIGHT_YELLOW),
}

_COLOR_MODES = {"auto": None, "always": True, "never": False}

class ConsoleReporter:
    """Writes testdox lines to stdout, colored only when stdout is a terminal."""

    def __init__(self, color: str = "auto", show_module: bool = False):
        self.color: Optional[bool] = _COLOR_MODES[color]
        self.show_module = show_module
        self.counts = {s: 0 for s in Status}

    def render(self, result: TestResult, sentence: str) -> str:
        glyph, fg = GLYPHS[result.status]
        module = result.module if self.show_module else None
        if module:
            sentence = f"{typer.style(module, fg=typer.colors.BRIGHT_BLUE)} – {sentence}"
        return f" {typer.style(glyph, fg=fg)} {sentence}"

    def emit_result(self, result: TestResult, sentence: Optional[str] = None) -> None:
        if sentence is None:
            sentence = result.sentence
        self.counts[result.status] += 1
        # click strips the ANSI codes again unless color is enabled
        typer.echo(self.render(result, sentence), color=self.color)

    def emit_passthrough(self, text: str) -> None:
        typer.echo(text, color=True)

    @property
    def passed(self) -> int: return self.counts[Status.PASSED]
    @property
    def failed(self) -> int: return self.counts[Status.FAILED]
    @property
    def ignored(self) -> int: return self.counts[Status.IGNORED]
