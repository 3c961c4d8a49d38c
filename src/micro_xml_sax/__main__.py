"""Allow ``python -m micro_xml_sax``."""

import sys

from micro_xml_sax.cli import main

sys.exit(main())
