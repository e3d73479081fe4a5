"""Module entrypoint for `python -m rest_schema`.

Delegates to the CLI implementation.
"""

from .cli.run_cli import main


if __name__ == "__main__":
    main()
