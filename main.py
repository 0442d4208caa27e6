from eolscan.cli.app import cli


def main():
    """Entry point for the eolscan CLI. Delegates to eolscan.cli.app:cli."""
    cli()


if __name__ == "__main__":
    main()
