import sys

from hire.adapters.textual.app import main

sys.exit(main())
