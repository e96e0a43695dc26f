"""Module entrypoint for `python -m workflow_validator`."""

from .linter.run_validate import main


if __name__ == "__main__":
    main()
