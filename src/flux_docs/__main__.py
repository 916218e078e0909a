import sys

from flux_docs.cli import main


sys.exit(main())
