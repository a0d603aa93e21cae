"""Allow running as ``python -m auth_scaffold``."""

from .cli import main

if __name__ == "__main__":
    main()
