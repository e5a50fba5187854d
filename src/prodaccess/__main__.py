# prodaccess/__main__.py

from prodaccess.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
