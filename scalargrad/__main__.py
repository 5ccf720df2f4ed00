import sys

from scalargrad.demo import main

sys.exit(main())
