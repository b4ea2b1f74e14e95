def main() -> None:
    """CLI entrypoint for the rollsum console script."""
    from rollsum.cli.app import app

    app()
