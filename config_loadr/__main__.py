import sys

from config_loadr.cli.run import main

sys.exit(main())
