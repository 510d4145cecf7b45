from __future__ import annotations

import typer


class UI:
    def info(self, msg: str) -> None:
        typer.echo(msg)

    def item(self, msg: str) -> None:
        typer.echo(f"\t{msg}")

    def warn(self, msg: str) -> None:
        typer.echo(f"Warning: {msg}")

    def fail(self, msg: str) -> None:
        typer.echo(msg, err=True)


ui = UI()
