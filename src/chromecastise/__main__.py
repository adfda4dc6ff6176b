"""Allow ``python -m chromecastise``."""

from chromecastise.cli import main

if __name__ == "__main__":
    main()
