"""Allow ``python -m skill_forge``."""

import sys

from skill_forge.cli.main import main

sys.exit(main())
