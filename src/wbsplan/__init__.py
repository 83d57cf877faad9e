# SPDX-License-Identifier: MIT

from wbsplan.cleanup import register_cleanup
from wbsplan.initialize import initialize
from wbsplan.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
