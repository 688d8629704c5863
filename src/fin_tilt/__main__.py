import sys

from fin_tilt.main import main

sys.exit(main())
