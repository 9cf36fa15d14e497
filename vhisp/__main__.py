import sys

from vhisp.repl import main

sys.exit(main())
