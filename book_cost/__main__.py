import sys

from book_cost.cli import main

sys.exit(main())
