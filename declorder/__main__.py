import sys

from declorder.cli import main

sys.exit(main())
