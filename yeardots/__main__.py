import sys

from yeardots.cli import main

sys.exit(main())
