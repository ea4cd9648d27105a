import sys

from checkcors.main import main

sys.exit(main())
