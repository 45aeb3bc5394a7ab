import sys

from climate_report.main import main

sys.exit(main())
