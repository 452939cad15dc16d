import os
import sys
from pathlib import Path

import fncli

from .core.errors import MdweekError
from .lib import ansi


def main():
    if os.environ.get("NO_COLOR"):
        ansi.use(ansi.PLAIN)
    fncli.autodiscover(Path(__file__).parent, "mdweek")

    user_args = sys.argv[1:]
    argv = ["mdweek", *(user_args or ["show"])]
    try:
        code = fncli.dispatch(argv)
    except MdweekError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
