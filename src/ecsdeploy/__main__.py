"""Main entry point for ecsdeploy."""

from ecsdeploy.cli.main import main


if __name__ == "__main__":
    main()
