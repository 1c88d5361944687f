"""``python -m chessmatch`` — play in the terminal."""

from chessmatch.cli.terminal import main

if __name__ == "__main__":
    main()
