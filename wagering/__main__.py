import sys

from wagering.cli import main

sys.exit(main())
