"""Allow ``python -m py_fm``."""

from py_fm.cli import main

if __name__ == "__main__":
    main()
