import sys

from ulpcheck.cli import main

sys.exit(main())
