"""Allow running s3mirror as ``python -m s3mirror``."""

from .cli import main

if __name__ == "__main__":
    main()
