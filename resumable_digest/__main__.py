import sys

from resumable_digest.demo import main

sys.exit(main())
