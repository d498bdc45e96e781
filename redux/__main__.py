"""Allow ``python -m redux``."""

from redux.cli.main import main


main()
