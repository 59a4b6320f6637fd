import sys

from systime.cli import main

sys.exit(main())
