import sys

from airtraffic.cli import main

sys.exit(main())
