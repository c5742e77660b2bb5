import sys

from .convert_psl import main

sys.exit(main())
