import sys

from permit_signer.cli import main

sys.exit(main())
