from __future__ import annotations

import typer


class TerminalInput:
    """Interactive answers from the controlling terminal."""

    def keypress(self, message: str) -> str:
        typer.echo(message, nl=False)
        # getchar switches the terminal to raw mode for one key.
        answer = typer.getchar()
        typer.echo()
        return answer

    def line(self, message: str) -> str:
        try:
            return typer.prompt(message, default="", show_default=False)
        except typer.Abort:
            # EOF or Ctrl-D reads as an empty answer.
            typer.echo()
            return ""
