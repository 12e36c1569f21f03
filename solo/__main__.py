import sys

from solo.main import main

sys.exit(main())
