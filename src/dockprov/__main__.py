"""Entry point for ``python -m dockprov``."""

from dockprov.cli.main import main


if __name__ == "__main__":
    main()
