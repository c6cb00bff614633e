import sys

from sleeponlan.main import main

sys.exit(main())
