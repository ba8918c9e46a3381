import sys

from tpol.main import main

sys.exit(main())
