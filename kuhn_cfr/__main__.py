import sys

from kuhn_cfr.cli import main

sys.exit(main())
