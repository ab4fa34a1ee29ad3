import sys

from serialcomm.main import main

sys.exit(main())
