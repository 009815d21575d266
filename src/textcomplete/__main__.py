"""Allow ``python -m textcomplete <query>``."""
from __future__ import annotations
import sys

from textcomplete.remote.completions import main

if __name__ == "__main__":
    sys.exit(main())
