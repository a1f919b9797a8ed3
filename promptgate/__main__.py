import sys

from promptgate.api.main import main

sys.exit(main())
