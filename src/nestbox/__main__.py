"""Allow ``python -m nestbox``."""

import sys

from nestbox.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
