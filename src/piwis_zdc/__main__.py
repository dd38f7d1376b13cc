import sys

from piwis_zdc.cli.main import main

sys.exit(main())
