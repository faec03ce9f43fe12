import sys

from stateless_fsm.cli import main

sys.exit(main())
