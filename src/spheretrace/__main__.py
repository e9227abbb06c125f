import sys

from spheretrace.cli import main

sys.exit(main())
