"""Allow ``python -m anifranchise``."""

from anifranchise.cli.commands import main

if __name__ == "__main__":
    main()
