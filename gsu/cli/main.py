"""CLI entrypoint exposing the update command as the `gsu` console script."""

from ..commands.update.cli import app


def main() -> None:
    app(prog_name="gsu")


if __name__ == "__main__":
    main()
