import sys

from tsdextractor.main import main

sys.exit(main())
