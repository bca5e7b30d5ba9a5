import sys

from appearance_switch.main import main

sys.exit(main())
