import sys
from pocketnotes.cli import main

sys.exit(main())
