"""Allow ``python -m texpdf``."""
import sys

from texpdf.src.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    raise SystemExit(main(sys.argv[1:]))
