"""Allow ``python -m wpscaffold``."""

from wpscaffold.cli import main

if __name__ == "__main__":
    main()
