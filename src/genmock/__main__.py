"""Allow ``python -m genmock``."""

from genmock.cli.main import main

if __name__ == "__main__":
    main()
